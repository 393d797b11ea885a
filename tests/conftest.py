from __future__ import annotations

from pathlib import Path

import pytest

from define_explorer.application.models import DefineParseSummary
from define_explorer.domain.entities import ParsedDefineXML, ProcessedVLM
from define_explorer.infrastructure.container import DependencyContainer
from define_explorer.infrastructure.io.define_xml import parse_define_xml

FIXTURES_DIR = Path(__file__).parent / "fixtures"
ENV_VARS = (
    "DEFINE_EXPLORER_MAX_FILE_SIZE_MB",
    "DEFINE_EXPLORER_VLM_CLASS",
    "DEFINE_EXPLORER_PREFERENCES_FILE",
)


class RecordingLogger:
    """LoggerPort implementation that keeps every message for assertions."""

    def __init__(self) -> None:
        super().__init__()
        self.messages: dict[str, list[str]] = {
            "info": [],
            "success": [],
            "warning": [],
            "error": [],
            "debug": [],
            "verbose": [],
        }
        self.parsed: list[DefineParseSummary] = []
        self.vlm_started: list[str] = []
        self.vlm_completed: list[tuple[str, int, int]] = []
        self.final_stats_calls = 0

    @property
    def warnings(self) -> list[str]:
        return self.messages["warning"]

    @property
    def errors(self) -> list[str]:
        return self.messages["error"]

    def info(self, message: str) -> None:
        self.messages["info"].append(message)

    def success(self, message: str) -> None:
        self.messages["success"].append(message)

    def warning(self, message: str) -> None:
        self.messages["warning"].append(message)

    def error(self, message: str) -> None:
        self.messages["error"].append(message)

    def debug(self, message: str) -> None:
        self.messages["debug"].append(message)

    def verbose(self, message: str) -> None:
        self.messages["verbose"].append(message)

    def log_define_parsed(self, summary: DefineParseSummary) -> None:
        self.parsed.append(summary)

    def log_vlm_start(self, dataset: str) -> None:
        self.vlm_started.append(dataset)

    def log_vlm_complete(
        self, dataset: str, variable_count: int, warning_count: int
    ) -> None:
        self.vlm_completed.append((dataset, variable_count, warning_count))

    def log_final_stats(self) -> None:
        self.final_stats_calls += 1


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment overrides out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def define_xml_path() -> Path:
    return FIXTURES_DIR / "define_adlb.xml"


@pytest.fixture
def define_xml_text(define_xml_path: Path) -> str:
    return define_xml_path.read_text(encoding="utf-8")


@pytest.fixture
def parsed_define(define_xml_text: str) -> ParsedDefineXML:
    return parse_define_xml(define_xml_text)


@pytest.fixture
def adlb_vlm(parsed_define: ParsedDefineXML) -> ProcessedVLM:
    container = DependencyContainer(use_null_logger=True)
    return container.create_vlm_use_case().execute(parsed_define, "ADLB")
