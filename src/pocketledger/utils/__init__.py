"""Utility functions for pocketledger."""

from pocketledger.utils.date_parser import parse_date
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.clock import Clock, FixedClock

__all__ = ["parse_date", "parse_amount", "Clock", "FixedClock"]
