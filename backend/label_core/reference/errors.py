"""
Errors raised by the reference-data layer.
"""


class ReferenceDataError(ValueError):
    """A reference-data source is missing or structurally invalid."""


class ReferenceDataNotLoadedError(RuntimeError):
    """Matching or classification attempted before reference data was installed."""

    def __init__(self, message: str = "Reference data not loaded; call load() before classifying."):
        super().__init__(message)
