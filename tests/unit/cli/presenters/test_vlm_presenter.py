"""Tests for the value-level metadata presenter."""

from io import StringIO

import pytest
from rich.console import Console

from define_explorer.cli.presenters import VLMPresenter, VLMViewRequest
from define_explorer.domain.entities import ProcessedVLM


@pytest.fixture
def buffer() -> StringIO:
    return StringIO()


@pytest.fixture
def presenter(buffer) -> VLMPresenter:
    return VLMPresenter(Console(file=buffer, force_terminal=False, width=160))


def test_grid_and_warnings(presenter, buffer, adlb_vlm):
    presenter.present(VLMViewRequest(vlm=adlb_vlm))
    output = buffer.getvalue()

    assert "Value-Level Metadata: ADLB" in output
    for column in ("PARAMCD", "PARAM", "AVAL", "AVALC", "PARCAT1", "ANRIND"):
        assert column in output
    assert "Hemoglobin (g/dL)" in output
    assert "Validation warnings (7):" in output
    assert "Variable ANRIND is missing definitions for 2 parameters" in output
    assert "Parameter Coverage" not in output
    assert "Hidden columns" not in output


def test_hidden_columns_are_dropped(presenter, buffer, adlb_vlm):
    presenter.present(
        VLMViewRequest(vlm=adlb_vlm, hidden_columns=frozenset({"AVALC", "NOTAVAR"}))
    )
    output = buffer.getvalue()

    assert "AVALC" not in output.split("Hidden columns")[0]
    assert "Hidden columns: AVALC" in output


def test_coverage_table(presenter, buffer, adlb_vlm):
    presenter.present(VLMViewRequest(vlm=adlb_vlm, show_coverage=True))
    output = buffer.getvalue()

    assert "Parameter Coverage" in output
    assert "33.3" in output
    assert "100.0" in output


def test_empty_vlm(presenter, buffer):
    presenter.present(VLMViewRequest(vlm=ProcessedVLM(dataset="ADSL", variables={})))

    assert "No value-level metadata found for ADSL" in buffer.getvalue()
