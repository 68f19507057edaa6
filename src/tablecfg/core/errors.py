"""Bootstrap error taxonomy.

Every error here is fatal for bootstrap except ``ConfigurationWarning``,
which is only ever emitted as a warning.
"""

from __future__ import annotations


class BootstrapError(RuntimeError):
    """Base class for failures that must abort process startup."""


class ClientConfigurationError(BootstrapError):
    """A required client setting is missing or invalid."""


class ProvisioningError(BootstrapError):
    """Deleting, creating, describing or waiting on the table failed."""

    def __init__(self, table_name: str, step: str, message: str):
        super().__init__(f"{step} failed for table {table_name!r}: {message}")
        self.table_name = table_name
        self.step = step


class ScanError(BootstrapError):
    """Reading the table failed."""

    def __init__(self, table_name: str, page: int, message: str):
        super().__init__(f"Scan of table {table_name!r} failed on page {page}: {message}")
        self.table_name = table_name
        self.page = page


class MalformedRowError(BootstrapError):
    """A scanned row lacks a required string attribute."""

    def __init__(self, row_id, attribute: str):
        super().__init__(f"Row {row_id!r} is missing required string attribute {attribute!r}")
        self.row_id = row_id
        self.attribute = attribute


class ConfigurationWarning(UserWarning):
    """An optional client setting could not be applied and was skipped."""
