# backend/titanic_eda/core/errors.py
"""Error kinds raised by the engine and translated to HTTP errors by the routers."""


class EDAError(Exception):
    """Base class for every error the analysis engine raises on purpose."""


class EmptyInputError(EDAError):
    """One or both record batches were missing or empty at merge time."""


class ParseFailure(EDAError):
    """An uploaded CSV file could not be parsed into records."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Error parsing {source}: {reason}")


class ExportFailure(EDAError):
    """Serialising the dataset or the report failed."""


class DatasetShapeError(EDAError):
    """The input is not a dataset of the expected shape (wrong type, unknown column)."""


class NoDatasetError(EDAError):
    """An analysis was requested before any dataset was loaded."""
