"""Spreadsheet cell values, Excel date serials, column ranges and data validation rules."""

__version__ = "0.1.0"
__all__ = ["cell", "columns", "dates", "validation"]