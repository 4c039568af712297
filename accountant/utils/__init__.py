"""Utility helpers."""

from accountant.utils.currency import format_amount, format_currency

__all__ = ["format_amount", "format_currency"]
