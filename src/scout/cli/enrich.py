"""CLI command for the enrichment pipeline.

Usage:
    scout enrich leads.json -o enriched.json
"""

import asyncio

import click

from ..config import get_settings
from ..enrichment.pipeline import EnrichmentPipeline
from ..exceptions import EnrichmentConfigError
from ..models.lead import Lead
from .common import echo_json, load_leads


async def _run_enrichment(leads: list[Lead]) -> list[Lead]:
    async with EnrichmentPipeline.from_settings(get_settings()) as pipeline:
        return await pipeline.enrich_leads(leads)


@click.command()
@click.argument("file", type=click.File("r"))
@click.option("--output", "-o", type=click.File("w"), help="Write records here instead of stdout")
def enrich(file, output) -> None:
    """Enrich the leads in FILE with every configured layer."""
    leads = load_leads(file)
    try:
        enriched = asyncio.run(_run_enrichment(leads))
    except EnrichmentConfigError as e:
        raise click.ClickException(str(e))

    echo_json([lead.to_record() for lead in enriched], output)
    if output is not None:
        click.echo(f"Wrote {len(enriched)} lead(s) to {output.name}", err=True)
