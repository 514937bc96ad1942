"""Logging and telemetry."""

from algolia_client.observability.logging import setup_logging
from algolia_client.observability.telemetry import Telemetry

__all__ = ["Telemetry", "setup_logging"]
