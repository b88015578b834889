"""Shared helpers for taskline."""

from .datetime import parse_datetime, parse_stored_datetime, stringify

__all__ = ["parse_datetime", "parse_stored_datetime", "stringify"]
