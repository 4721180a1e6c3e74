"""Utility functions for ledgerit."""

from ledgerit.utils.date_parser import parse_datetime, get_date_range
from ledgerit.utils.id_resolver import resolve_transaction_id

__all__ = ["parse_datetime", "get_date_range", "resolve_transaction_id"]
