"""
Exceptions raised by the tracker. Every one is recovered at the boundary
(HTTP 400, CLI message, or the store's ``save_error``).
"""


class TrackerError(Exception):
    """Base class for all tracker errors."""


class CatalogImportError(TrackerError):
    """Imported rows are malformed or contain no usable items."""


class SheetFetchError(TrackerError):
    """Spreadsheet URL is invalid or its CSV export could not be fetched."""


class PersistenceWriteError(TrackerError):
    """State could not be serialized or written to local storage."""
