"""Utility functions for netpay."""

from netpay.utils.amount_parser import parse_amount, parse_amount_or_zero

__all__ = ["parse_amount", "parse_amount_or_zero"]
