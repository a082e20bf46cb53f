"""
release-spine: Azure Local release metadata, normalized.

Reads the Microsoft Learn release table (HTML) and the offline solution
update table (Markdown), joins them on OS build, derives release-train
classification, and serves the result through a filterable API.

Packages:
- core: logging, errors, settings, cache, timestamps
- domains.azure_local: extraction, transformation, aggregation, filtering
- api: FastAPI serving layer
- cli: Typer command line
"""

__version__ = "1.0.0"
