"""
Funding News - humanitarian and development funding headlines.

Architecture:
- core/: Stable foundation (models, HTTP client, date normalization, keywords)
- strategies/: Per-source fetch strategies and the concurrent dispatcher
- relevance: Funding/region classification, recency windows, ranking
- projections: Headline, raw and debug output views
- config/: JSON/YAML-driven source definitions
"""

__version__ = "0.3.0"
BUILD = "headlines v3"

__all__ = ["__version__", "BUILD"]
