"""
Core layer - stable foundation for the headlines pipeline.

Components:
- models: SourceSpec, NormalizedItem, FetchResult dataclasses
- http_client: Shared async HTTP client with per-fetch timeouts
- dates: Multi-format date normalization into a target zone
- keywords: Funding, donor and default region term lists
"""

from .models import SourceSpec, NormalizedItem, FetchResult, NO_TITLE
from .dates import parse_date, resolve_zone

__all__ = [
    "SourceSpec",
    "NormalizedItem",
    "FetchResult",
    "NO_TITLE",
    "parse_date",
    "resolve_zone",
]
