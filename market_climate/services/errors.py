from __future__ import annotations


class MissingColumnError(ValueError):
    """Raised when the table header lacks a column the parser requires."""

    def __init__(self, *, column: str, role: str, available: list[str]) -> None:
        self.column = column
        self.role = role
        self.available = available
        super().__init__(
            f"Missing {role} column '{column}' in table header. "
            f"Available columns: {available}"
        )


class DataFetchError(Exception):
    """Raised when the raw table cannot be fetched. The pipeline never retries."""

    def __init__(self, *, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Failed to fetch {location}: {reason}")


class ConfigError(ValueError):
    """Raised when pipeline or runtime configuration values are invalid."""
