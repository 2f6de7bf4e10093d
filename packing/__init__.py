"""Packing workflow core: spreadsheet rows -> packing records, filters, cell updates."""

__version__ = "0.1.0"
