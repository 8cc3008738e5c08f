"""Tests for the command line interface."""

import pytest
import yaml
from click.testing import CliRunner

import unievents.cli as cli_module
from unievents.cli import cli

CREDENTIALS = ["--username", "Group1", "--password", "admin123"]
FUTURE_DATE = "2099-05-01"


class FakePrompt:
    """Stands in for a questionary prompt with a fixed answer."""

    def __init__(self, answer):
        self.answer = answer
        self.asked = 0

    def ask(self):
        self.asked += 1
        return self.answer


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "unievents.yaml"
    path.write_text(yaml.safe_dump({"data_directory": "data"}), encoding="utf-8")
    return path


@pytest.fixture
def run(config_path):
    runner = CliRunner()

    def invoke(*args, credentials=True, **kwargs):
        prefix = ["--config", str(config_path)] + (CREDENTIALS if credentials else [])
        return runner.invoke(cli, prefix + list(args), **kwargs)

    return invoke


def add_athletics(run, *extra):
    result = run(
        "add",
        "--name", "Athletics",
        "--date", FUTURE_DATE,
        "--time", "10:00",
        "--venue", "Library",
        "--organizer", "Sam",
        *extra,
    )
    assert result.exit_code == 0, result.output
    return result


class TestLogin:
    def test_wrong_password(self, run):
        result = run("list", credentials=False, input="Group1\nwrong\n")
        assert result.exit_code == 1
        assert "Invalid credentials." in result.output

    def test_prompted_credentials(self, run):
        result = run("list", credentials=False, input="Group1\nadmin123\n")
        assert result.exit_code == 0, result.output
        assert "No events scheduled yet." in result.output

    def test_missing_config_file(self, tmp_path):
        result = CliRunner().invoke(
            cli, ["--config", str(tmp_path / "missing.yaml"), *CREDENTIALS, "list"]
        )
        assert result.exit_code == 2


class TestAdd:
    def test_add_and_list(self, run):
        result = add_athletics(run)
        assert "Event added successfully: EVT-0001 Athletics" in result.output
        listing = run("list").output
        assert "EVT-0001" in listing
        assert "Sports" in listing
        assert f"{FUTURE_DATE} 10:00" in listing

    def test_catalog_spelling_is_used(self, run):
        add_athletics(run)
        result = run("list")
        assert "Library" in result.output

    def test_clash_is_rejected(self, run):
        add_athletics(run)
        result = run(
            "add",
            "--name", "Annual Job & Career Fair",
            "--date", FUTURE_DATE,
            "--time", "10:00",
            "--venue", "library",
            "--organizer", "Ruben",
        )
        assert result.exit_code == 1
        assert "already scheduled at this venue" in result.output

    def test_invalid_date(self, run):
        result = run(
            "add", "--name", "Athletics", "--date", "01/05/2099",
            "--venue", "Library", "--organizer", "Sam",
        )
        assert result.exit_code == 2
        assert "YYYY-MM-DD" in result.output

    def test_past_date(self, run):
        result = run(
            "add", "--name", "Athletics", "--date", "2000-01-01",
            "--venue", "Library", "--organizer", "Sam",
        )
        assert result.exit_code == 1
        assert "cannot be in the past" in result.output

    def test_duplicate_name_auto(self, run):
        add_athletics(run)
        result = add_athletics(run, "--on-conflict", "auto", "--time", "11:00")
        assert "EVT-0002 Athletics (2)" in result.output

    def test_duplicate_name_cancel(self, run):
        add_athletics(run)
        result = add_athletics(run, "--on-conflict", "cancel", "--time", "11:00")
        assert "Operation cancelled." in result.output
        assert "EVT-0002" not in run("list").output

    def test_duplicate_id_ask(self, run, monkeypatch):
        add_athletics(run)
        prompt = FakePrompt("Auto-generate new ID")
        monkeypatch.setattr(cli_module.questionary, "select", lambda *a, **k: prompt)
        result = run(
            "add",
            "--name", "Annual Job & Career Fair",
            "--date", FUTURE_DATE,
            "--venue", "Gallery",
            "--organizer", "Bruno",
            "--event-id", "EVT-0001",
        )
        assert result.exit_code == 0, result.output
        assert prompt.asked == 1
        assert "EVT-0002 Annual Job & Career Fair" in result.output


class TestUpdateAndDelete:
    def test_update_with_confirmation_flag(self, run):
        add_athletics(run)
        result = run("update", "EVT-0001", "--venue", "Gallery", "--yes")
        assert result.exit_code == 0, result.output
        assert "Event updated successfully" in result.output
        assert "Gallery" in run("list").output

    def test_update_without_changes(self, run):
        add_athletics(run)
        result = run("update", "EVT-0001", "--venue", "Library", "--yes")
        assert "No changes to update." in result.output

    def test_update_declined(self, run, monkeypatch):
        add_athletics(run)
        monkeypatch.setattr(cli_module.questionary, "confirm", lambda *a, **k: FakePrompt(False))
        result = run("update", "EVT-0001", "--time", "12:30")
        assert "time: 10:00:00 -> 12:30:00" in result.output
        assert "Update cancelled." in result.output
        assert f"{FUTURE_DATE} 10:00" in run("list").output

    def test_update_unknown_event(self, run):
        result = run("update", "EVT-0404", "--venue", "Gallery", "--yes")
        assert result.exit_code == 1
        assert "EVT-0404 not found" in result.output

    def test_delete(self, run):
        add_athletics(run)
        result = run("delete", "EVT-0001", "--yes")
        assert "Event deleted." in result.output
        assert "No events scheduled yet." in run("list").output


class TestParticipants:
    def test_register_and_show(self, run):
        add_athletics(run)
        result = run("register", "EVT-0001", "Jane Doe", "Ada Lovelace", "--type", "staff")
        assert result.exit_code == 0, result.output
        assert "PAR-00001 Jane Doe (STAFF)" in result.output
        assert "PAR-00002 Ada Lovelace (STAFF)" in result.output
        shown = run("participants", "EVT-0001").output
        assert "2 participants" in shown
        assert "Ada Lovelace" in shown

    def test_duplicate_registration(self, run):
        add_athletics(run)
        run("register", "EVT-0001", "Jane Doe")
        result = run("register", "EVT-0001", "jane doe")
        assert result.exit_code == 1
        assert "already registered" in result.output


class TestReportAndTheme:
    def test_report_exports(self, run, tmp_path):
        add_athletics(run)
        run("register", "EVT-0001", "Jane Doe")
        csv_path = tmp_path / "schedule.csv"
        pdf_path = tmp_path / "report.pdf"
        result = run("report", "--csv", str(csv_path), "--pdf", str(pdf_path))
        assert result.exit_code == 0, result.output
        assert "Busiest Event:      Athletics (1)" in result.output
        assert csv_path.exists()
        assert pdf_path.read_bytes().startswith(b"%PDF")

    def test_theme(self, run, config_path):
        assert run("theme").output.strip() == "light"
        assert "Theme set to dark." in run("theme", "--dark").output
        assert run("theme").output.strip() == "dark"
        assert (config_path.parent / "data" / "settings.yaml").exists()
