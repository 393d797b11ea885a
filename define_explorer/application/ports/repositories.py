from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..models import DatasetRecord


@runtime_checkable
class DatasetRepositoryPort(Protocol):
    pass

    def add_dataset(self, record: DatasetRecord) -> None: ...

    def get_all_datasets(self) -> dict[str, DatasetRecord]: ...

    def get_dataset(self, key: str) -> DatasetRecord | None: ...

    def remove_dataset(self, key: str) -> None: ...


@runtime_checkable
class PreferencesRepositoryPort(Protocol):
    pass

    def load(self) -> dict[str, Any]: ...

    def save(self, preferences: dict[str, Any]) -> None: ...
