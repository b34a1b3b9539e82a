"""Data loading for the raw price table."""
