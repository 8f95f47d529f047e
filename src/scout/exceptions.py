"""Exception classes for Scout.

Upstream data problems (bad JSON, missing fields, failed lookups) are
never raised; these exceptions signal programmer misuse only.
"""


class ScoutError(Exception):
    """Base error for Scout."""


class VerificationStateError(ScoutError):
    """Illegal verification status transition."""

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot move verification from {from_status} to {to_status}"
        )


class EnrichmentConfigError(ScoutError):
    """Enrichment pipeline configured with an unknown layer."""

    def __init__(self, layer_name: str, available: list[str]):
        self.layer_name = layer_name
        self.available = available
        super().__init__(
            f"Unknown enrichment layer '{layer_name}'. "
            f"Available: {', '.join(sorted(available))}"
        )
