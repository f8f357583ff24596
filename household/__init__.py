"""Household income/expense ledgers and monthly settlement between two members."""

__version__ = "0.1.0"
