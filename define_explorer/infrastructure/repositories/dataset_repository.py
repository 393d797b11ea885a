from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.repositories import DatasetRepositoryPort

if TYPE_CHECKING:
    from ...application.models import DatasetRecord


class InMemoryDatasetRepository(DatasetRepositoryPort):
    """Imported Define-XML records keyed by original file name."""

    def __init__(self) -> None:
        super().__init__()
        self._records: dict[str, DatasetRecord] = {}

    @override
    def add_dataset(self, record: DatasetRecord) -> None:
        self._records[record.file_name] = record

    @override
    def get_all_datasets(self) -> dict[str, DatasetRecord]:
        return dict(self._records)

    @override
    def get_dataset(self, key: str) -> DatasetRecord | None:
        return self._records.get(key)

    @override
    def remove_dataset(self, key: str) -> None:
        self._records.pop(key, None)

    def clear(self) -> None:
        self._records.clear()
