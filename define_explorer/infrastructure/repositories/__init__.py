"""Repository implementations for data access.

This module provides concrete implementations of the repository ports for
imported Define-XML records and persisted UI preferences.
"""

from .dataset_repository import InMemoryDatasetRepository
from .preferences_repository import JsonPreferencesRepository, PreferencesSaveError

__all__ = [
    "InMemoryDatasetRepository",
    "JsonPreferencesRepository",
    "PreferencesSaveError",
]
