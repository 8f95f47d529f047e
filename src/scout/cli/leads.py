"""CLI commands that work on lead records without touching the network.

Usage:
    scout keys leads.json --known pipeline.json
    scout parse-discovery model_output.txt
    scout verify lead.json verification_output.txt
"""

import click

from ..exceptions import VerificationStateError
from ..forensics.discovery import parse_discovery_response
from ..forensics.identity import get_identity_keys, processed_identity_keys
from ..forensics.verification import (
    apply_verification,
    begin_verification,
    parse_verification_response,
)
from ..models.lead import VerificationStatus
from .common import echo_json, load_leads


@click.command()
@click.argument("file", type=click.File("r"))
@click.option(
    "--known",
    type=click.File("r"),
    help="Lead/sponsor records already processed; flags duplicates",
)
def keys(file, known) -> None:
    """Print identity keys for each lead in FILE."""
    leads = load_leads(file)
    known_keys = processed_identity_keys(load_leads(known)) if known else None

    rows = []
    for lead in leads:
        lead_keys = get_identity_keys(lead)
        row = {"id": lead.id, "companyName": lead.company_name, "keys": lead_keys}
        if known_keys is not None:
            row["alreadyProcessed"] = any(key in known_keys for key in lead_keys)
        rows.append(row)

    echo_json(rows)


@click.command()
@click.argument("file", type=click.File("r"))
def parse_discovery(file) -> None:
    """Turn raw discovery output in FILE into lead records."""
    leads = parse_discovery_response(file.read())
    echo_json([lead.to_record() for lead in leads])


@click.command()
@click.argument("lead_file", type=click.File("r"))
@click.argument("result_file", type=click.File("r"))
def verify(lead_file, result_file) -> None:
    """Apply the verification output in RESULT_FILE to the lead in LEAD_FILE."""
    leads = load_leads(lead_file)
    if len(leads) != 1:
        raise click.ClickException(f"{lead_file.name}: expected exactly one lead, got {len(leads)}")

    lead = leads[0]
    if lead.verification_status != VerificationStatus.VERIFYING:
        lead = begin_verification(lead)

    result = parse_verification_response(result_file.read())
    try:
        verified = apply_verification(lead, result)
    except VerificationStateError as e:
        raise click.ClickException(str(e))

    echo_json(verified.to_record())
