"""Unit tests for the interactive menu."""

import pytest

from run_predictor import parse_args, read_int, run_menu
from src.session import PredictionSession

CSV_CONTENT = (
    "mes,dia,establecimiento,atendidos,atenciones\n"
    + "".join(f"{(i % 12) + 1},{(i % 30) + 1},Posta {i % 2},{25 + i % 10},40\n" for i in range(40))
)


def scripted(answers):
    """Input function returning the given answers in order."""
    answers = iter(answers)
    return lambda prompt: next(answers)


@pytest.fixture
def attendance_csv(tmp_path):
    path = tmp_path / "attendance.csv"
    path.write_text(CSV_CONTENT, encoding="utf-8")
    return path


class TestArgumentParsing:
    """Test command-line argument parsing."""

    def test_custom_args(self):
        """Flags override the configured defaults."""
        args = parse_args(["--data-file", "data.csv", "--random-state", "3", "--max-workers", "2"])

        assert args.data_file == "data.csv"
        assert args.random_state == 3
        assert args.max_workers == 2

    def test_negative_random_state_exits(self):
        """A negative seed is a usage error."""
        with pytest.raises(SystemExit):
            parse_args(["--random-state", "-1"])

    def test_zero_max_workers_exits(self):
        """At least one worker thread is required."""
        with pytest.raises(SystemExit):
            parse_args(["--max-workers", "0"])


class TestReadInt:
    """Test integer prompts."""

    def test_valid_number(self):
        assert read_int("? ", scripted([" 7 "])) == 7

    def test_invalid_number(self, capsys):
        """Non-numeric answers return None and print a message."""
        assert read_int("? ", scripted(["seven"])) is None
        assert "not a number" in capsys.readouterr().out


class TestRunMenu:
    """Test the menu loop."""

    def test_full_session(self, attendance_csv, capsys):
        """Process, train, predict, evaluate and exit."""
        session = PredictionSession(random_state=4)
        answers = ["1", "1", "2", "5", "3", "2", "6", "15", "4", "5"]

        run_menu(session, str(attendance_csv), scripted(answers))

        out = capsys.readouterr().out
        assert "Records processed: 40" in out
        assert "Records have already been processed." in out
        assert "Algorithm trained with 5 trees" in out
        assert "1. Posta 0" in out
        assert "2. Posta 1" in out
        assert "Facility Posta 1 will" in out
        assert "Accuracy on loaded records" in out
        assert out.rstrip().endswith("Exiting...")

    def test_guards_before_setup(self, attendance_csv, capsys):
        """Training and prediction ask for the previous steps first."""
        session = PredictionSession()
        run_menu(session, str(attendance_csv), scripted(["2", "3", "4", "9", "5"]))

        out = capsys.readouterr().out
        assert "You must process the records first." in out
        assert out.count("You must train the algorithm first.") == 2
        assert "Invalid option, try again." in out
        assert not session.is_trained

    def test_invalid_prediction_inputs(self, attendance_csv, capsys):
        """Out-of-range facility, month and day are rejected."""
        session = PredictionSession(random_state=1)
        answers = [
            "1", "2", "3",
            "3", "9",
            "3", "1", "13",
            "3", "1", "2", "0",
            "5",
        ]
        run_menu(session, str(attendance_csv), scripted(answers))

        out = capsys.readouterr().out
        assert "Invalid number." in out
        assert "Invalid month." in out
        assert "Invalid day." in out

    def test_non_positive_tree_count(self, attendance_csv, capsys):
        """Zero trees is refused by the menu."""
        session = PredictionSession()
        run_menu(session, str(attendance_csv), scripted(["1", "2", "0", "5"]))

        assert "must be a positive integer" in capsys.readouterr().out
        assert not session.is_trained

    def test_failed_action_keeps_menu_running(self, tmp_path, capsys):
        """An error in one option is logged and the loop continues."""
        session = PredictionSession()
        run_menu(session, str(tmp_path / "missing.csv"), scripted(["1", "5"]))

        assert capsys.readouterr().out.rstrip().endswith("Exiting...")
        assert not session.has_records
