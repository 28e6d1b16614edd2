"""Observability — structured logging with correlation IDs."""

from fieldreport.observability.logging import get_correlation_id, setup_logging

__all__ = ["get_correlation_id", "setup_logging"]
