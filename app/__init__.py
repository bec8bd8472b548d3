"""Storefront wallet ledger service."""

__version__ = "0.3.0"
