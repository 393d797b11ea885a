"""Integration tests for CLI commands.

This module contains end-to-end integration tests for all CLI commands,
testing the complete workflow from command invocation to console and file
output.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from define_explorer.cli import app

FIXTURE = Path(__file__).parent.parent / "fixtures" / "define_adlb.xml"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _workdir(tmp_path, monkeypatch):
    """Run every command from an empty directory so preferences stay local."""
    monkeypatch.chdir(tmp_path)


def _preferences(tmp_path: Path) -> dict:
    path = tmp_path / ".define_explorer" / "preferences.json"
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.mark.integration
class TestApp:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("summary", "vlm", "graph"):
            assert command in result.output

    def test_missing_file_is_rejected_by_click(self, runner):
        result = runner.invoke(app, ["summary", "nope.xml"])

        assert result.exit_code == 2
        assert "does not exist" in result.output


@pytest.mark.integration
class TestSummaryCommand:
    def test_summary(self, runner):
        result = runner.invoke(app, ["summary", str(FIXTURE)])

        assert result.exit_code == 0, result.output
        assert "Parsed define_adlb.xml (ADaM)" in result.output
        assert "Study: CDISCPILOT01" in result.output
        assert "Define-XML Contents" in result.output
        assert "ADLB" in result.output

    def test_verbose_summary_prints_statistics(self, runner):
        result = runner.invoke(app, ["summary", str(FIXTURE), "-v"])

        assert result.exit_code == 0, result.output
        assert "Reading file" in result.output
        assert "Processing Statistics:" in result.output

    def test_unparseable_file(self, runner, tmp_path):
        broken = tmp_path / "broken.xml"
        broken.write_text("<ODM/>", encoding="utf-8")

        result = runner.invoke(app, ["summary", str(broken)])

        assert result.exit_code == 1
        assert "Could not load broken.xml" in result.output
        assert "Required namespace 'def' not found in XML" in result.output

    def test_unsupported_extension(self, runner, tmp_path):
        other = tmp_path / "define.json"
        other.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["summary", str(other)])

        assert result.exit_code == 1
        assert "Unsupported file type: define.json" in result.output

    def test_config_file_restricts_extensions(self, runner, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text('[limits]\nallowed_extensions = [".define"]\n', encoding="utf-8")

        result = runner.invoke(app, ["summary", str(FIXTURE), "--config", str(config)])

        assert result.exit_code == 1
        assert "Allowed: .define" in result.output


@pytest.mark.integration
class TestVLMCommand:
    def test_lists_vlm_datasets(self, runner):
        result = runner.invoke(app, ["vlm", str(FIXTURE)])

        assert result.exit_code == 0, result.output
        assert "Datasets with value-level metadata:" in result.output
        assert "  ADLB" in result.output
        assert "ADSL" not in result.output.split("metadata:")[1]

    def test_no_vlm_datasets_for_other_class(self, runner, tmp_path):
        (tmp_path / "define_explorer.toml").write_text(
            '[vlm]\ndataset_class = "OCCURRENCE DATA STRUCTURE"\n', encoding="utf-8"
        )

        result = runner.invoke(app, ["vlm", str(FIXTURE)])

        assert result.exit_code == 0, result.output
        assert "No datasets with value-level metadata found" in result.output

    def test_shows_dataset(self, runner):
        result = runner.invoke(app, ["vlm", str(FIXTURE), "--dataset", "adlb"])

        assert result.exit_code == 0, result.output
        assert "Value-Level Metadata: ADLB" in result.output
        assert "Validation warnings (7):" in result.output

    def test_coverage_flag(self, runner):
        result = runner.invoke(app, ["vlm", str(FIXTURE), "-d", "ADLB", "--coverage"])

        assert result.exit_code == 0, result.output
        assert "Parameter Coverage" in result.output
        assert "33.3" in result.output

    def test_unknown_dataset(self, runner):
        result = runner.invoke(app, ["vlm", str(FIXTURE), "--dataset", "ADSL"])

        assert result.exit_code == 1
        assert "Dataset ADSL has no value-level metadata. Available: ADLB" in (
            result.output
        )

    def test_hidden_columns_persist(self, runner, tmp_path):
        first = runner.invoke(
            app, ["vlm", str(FIXTURE), "-d", "ADLB", "--hide", "avalc", "--hide", "ANRIND"]
        )
        assert first.exit_code == 0, first.output
        assert "Hidden columns: ANRIND, AVALC" in first.output
        assert _preferences(tmp_path) == {
            "hidden_columns": {"ADLB": ["ANRIND", "AVALC"]}
        }

        second = runner.invoke(app, ["vlm", str(FIXTURE), "-d", "ADLB"])
        assert "Hidden columns: ANRIND, AVALC" in second.output

        third = runner.invoke(app, ["vlm", str(FIXTURE), "-d", "ADLB", "--show", "AVALC"])
        assert "Hidden columns: ANRIND" in third.output
        assert _preferences(tmp_path) == {"hidden_columns": {"ADLB": ["ANRIND"]}}

    def test_reset_hidden(self, runner, tmp_path):
        runner.invoke(app, ["vlm", str(FIXTURE), "-d", "ADLB", "--hide", "AVALC"])

        result = runner.invoke(app, ["vlm", str(FIXTURE), "-d", "ADLB", "--reset-hidden"])

        assert result.exit_code == 0, result.output
        assert "Hidden columns" not in result.output
        assert _preferences(tmp_path) == {"hidden_columns": {}}


@pytest.mark.integration
class TestGraphCommand:
    def test_graph_to_stdout(self, runner):
        result = runner.invoke(app, ["graph", str(FIXTURE)])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert len(payload["nodes"]) == 28
        assert len(payload["links"]) == 15

    def test_graph_to_file(self, runner, tmp_path):
        target = tmp_path / "out" / "graph.json"

        result = runner.invoke(app, ["graph", str(FIXTURE), "--output", str(target)])

        assert result.exit_code == 0, result.output
        assert "Wrote 28 nodes and 15 links" in result.output
        payload = json.loads(target.read_text(encoding="utf-8"))
        assert {"id": "IG.ADLB", "group": 1, "label": "IG.ADLB"} in payload["nodes"]
