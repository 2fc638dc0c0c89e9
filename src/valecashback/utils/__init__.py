"""Utility functions for Vale Cashback."""

from valecashback.utils.date_parser import parse_date
from valecashback.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
