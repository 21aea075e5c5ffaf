from .errors import ReferenceDataError, ReferenceDataNotLoadedError
from .reference_data import ReferenceDataSet, CompiledRule
from .provider import (
    ReferenceDataProvider,
    InMemoryReferenceDataProvider,
    JsonReferenceDataProvider,
    load_reference_data,
)

__all__ = [
    "ReferenceDataError",
    "ReferenceDataNotLoadedError",
    "ReferenceDataSet",
    "CompiledRule",
    "ReferenceDataProvider",
    "InMemoryReferenceDataProvider",
    "JsonReferenceDataProvider",
    "load_reference_data",
]
