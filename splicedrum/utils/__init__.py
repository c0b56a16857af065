"""Utility helpers."""

from splicedrum.utils.logging_setup import configure_logging

__all__ = ["configure_logging"]
