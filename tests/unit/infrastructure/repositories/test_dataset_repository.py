"""Tests for the in-memory dataset repository."""

import pytest

from define_explorer.application.models import DatasetRecord, DefineDetails
from define_explorer.application.ports.repositories import DatasetRepositoryPort
from define_explorer.infrastructure.repositories import InMemoryDatasetRepository


def _record(file_name: str, parsed_define) -> DatasetRecord:
    return DatasetRecord(
        file_name=file_name,
        document=parsed_define,
        details=DefineDetails(num_rows=2, num_columns=13),
    )


@pytest.fixture
def repository() -> InMemoryDatasetRepository:
    return InMemoryDatasetRepository()


def test_implements_port(repository):
    assert isinstance(repository, DatasetRepositoryPort)


def test_add_and_get(repository, parsed_define):
    record = _record("define.xml", parsed_define)
    repository.add_dataset(record)

    assert repository.get_dataset("define.xml") is record
    assert repository.get_dataset("other.xml") is None


def test_add_replaces_record_with_same_file_name(repository, parsed_define):
    repository.add_dataset(_record("define.xml", parsed_define))
    replacement = _record("define.xml", parsed_define)
    repository.add_dataset(replacement)

    assert repository.get_all_datasets() == {"define.xml": replacement}


def test_get_all_returns_copy(repository, parsed_define):
    repository.add_dataset(_record("define.xml", parsed_define))
    snapshot = repository.get_all_datasets()
    snapshot.clear()

    assert list(repository.get_all_datasets()) == ["define.xml"]


def test_remove_is_tolerant_of_unknown_keys(repository, parsed_define):
    repository.add_dataset(_record("define.xml", parsed_define))
    repository.remove_dataset("missing.xml")
    repository.remove_dataset("define.xml")

    assert repository.get_all_datasets() == {}


def test_clear(repository, parsed_define):
    repository.add_dataset(_record("a.xml", parsed_define))
    repository.add_dataset(_record("b.xml", parsed_define))
    repository.clear()

    assert repository.get_all_datasets() == {}
