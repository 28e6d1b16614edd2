"""fieldreport — disaster field reports: CSV ingestion, cascading selection, log search."""

__version__ = "1.0.0"
