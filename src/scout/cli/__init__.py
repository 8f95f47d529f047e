"""CLI entry points for Scout.

Provides command-line tools for:
- Identity keys and dedup checks
- Parsing discovery output into leads
- Running the enrichment pipeline
- Applying verification results
"""

import click

from .. import __version__
from ..logging import setup_logging
from .enrich import enrich
from .leads import keys, parse_discovery, verify


@click.group()
@click.version_option(version=__version__, prog_name="scout")
def main():
    """Scout - sponsor prospecting forensics.

    Every command reads JSON (or raw model text) from files and writes
    JSON to stdout. Logs go to stderr.
    """
    setup_logging()


main.add_command(keys, name="keys")
main.add_command(parse_discovery, name="parse-discovery")
main.add_command(enrich, name="enrich")
main.add_command(verify, name="verify")


if __name__ == "__main__":
    main()
