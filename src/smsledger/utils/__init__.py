"""Utility functions for smsledger."""

from smsledger.utils.date_parser import parse_date, parse_datetime, parse_message_datetime
from smsledger.utils.amount_parser import parse_amount, to_money

__all__ = ["parse_date", "parse_datetime", "parse_message_datetime", "parse_amount", "to_money"]
