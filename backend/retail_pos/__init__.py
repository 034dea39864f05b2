"""Retail POS backend: access control, import/export, receipts and messaging."""

__version__ = "0.1.0"
