"""Loaders for the raw price table."""
from .source_loader import fetch_table_text

__all__ = ["fetch_table_text"]
