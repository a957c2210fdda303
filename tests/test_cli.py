"""Tests for the command line entry point in cli.py"""

import pytest

from rocket_telemetry.cli import build_parser, format_report, main
from rocket_telemetry.domain import InferenceStats, SummaryStatistics

PLOT_NAMES = ("acceleration", "gyroscope", "position", "velocity", "control", "servos", "performance")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CSV_PATH", "API_URL", "TIMEOUT_S", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"ROCKET_TELEMETRY_{name}", raising=False)


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "flight.csv"
    path.write_text(
        "timestamp,pos_z,vel_x,vel_y,vel_z,inference_time_us\n"
        "1010000,12.5,3,4,0,100\n"
        "1010002,10,1,0,0,300\n",
        encoding="utf-8",
    )
    return path


class TestFormatReport:
    """Tests for the format_report function."""

    def test_no_stats(self):
        """Without statistics the report says the window is empty."""
        assert "No telemetry rows inside the analysis window." in format_report(0, None)

    def test_lists_statistics(self):
        """Every card item and the inference breakdown appear in the report."""
        stats = SummaryStatistics(2.0, 12.5, 5.0, None, InferenceStats(100.0, 300.0, 200.0, 300.0))
        report = format_report(2, stats)
        assert "Records in window: 2" in report
        assert "  - Max Altitude: 12.50m" in report
        assert "  - Max Acceleration: N/A" in report
        assert "median=300.00" in report


class TestMain:
    """Tests for the report subcommand."""

    def test_report_prints_stats(self, csv_file, capsys):
        """The statistics are printed to stdout."""
        assert main(["report", "--source", str(csv_file)]) == 0
        out = capsys.readouterr().out
        assert "Flight Time: 2.00s" in out
        assert "Max Velocity: 5.00m/s" in out

    def test_report_writes_files(self, csv_file, tmp_path, capsys):
        """--out writes <base>.txt and one PNG per chart."""
        out_base = tmp_path / "out" / "flight"
        out_base.parent.mkdir()
        assert main(["report", "--source", str(csv_file), "--out", str(out_base)]) == 0
        assert "Max Altitude: 12.50m" in (out_base.parent / "flight.txt").read_text(encoding="utf-8")
        for name in PLOT_NAMES:
            assert (out_base.parent / f"flight_{name}.png").exists()

    def test_dotted_base_keeps_its_name(self, csv_file, tmp_path, capsys):
        """A dot in the base name is kept: report and plots share the 'flight.v2' prefix."""
        out_base = tmp_path / "flight.v2"
        assert main(["report", "--source", str(csv_file), "--out", str(out_base)]) == 0
        assert (tmp_path / "flight.v2.txt").exists()
        assert not (tmp_path / "flight.txt").exists()
        for name in PLOT_NAMES:
            assert (tmp_path / f"flight.v2_{name}.png").exists()

    def test_missing_output_directory_is_created(self, csv_file, tmp_path, capsys):
        """Parent directories of --out are created as needed."""
        out_base = tmp_path / "runs" / "2026" / "flight"
        assert main(["report", "--source", str(csv_file), "--out", str(out_base)]) == 0
        assert (out_base.parent / "flight.txt").exists()

    def test_report_load_failure(self, tmp_path, capsys):
        """A missing source prints the single error message and exits 1."""
        assert main(["report", "--source", str(tmp_path / "missing.csv")]) == 1
        assert "Failed to load telemetry data" in capsys.readouterr().out

    def test_report_malformed_url(self, capsys):
        """A malformed endpoint URL is reported like any other load failure."""
        assert main(["report", "--source", "http://[::1"]) == 1
        assert "Failed to load telemetry data" in capsys.readouterr().out

    def test_report_uses_env_source(self, csv_file, monkeypatch, capsys):
        """Without --source the configured CSV path is used."""
        monkeypatch.setenv("ROCKET_TELEMETRY_CSV_PATH", str(csv_file))
        assert main(["report"]) == 0
        assert "Records in window: 2" in capsys.readouterr().out

    def test_command_required(self):
        """Running without a subcommand is a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
