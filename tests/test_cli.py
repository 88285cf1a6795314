"""Tests for the command-line interface."""

from unittest.mock import patch

import pytest

from gp_predictor.cli import main, parse_arguments
from gp_predictor.models import UsageError


class TestParseArguments:
    """Test argument validation."""

    def test_track_only(self):
        args = parse_arguments(["Monza"])
        assert args.track == "Monza"
        assert args.condition == ""

    def test_track_and_condition_is_lower_cased(self):
        args = parse_arguments(["Monza", "WET"])
        assert args.condition == "wet"

    def test_no_arguments(self):
        with pytest.raises(UsageError, match="No arguments"):
            parse_arguments([])

    def test_too_many_arguments(self):
        with pytest.raises(UsageError):
            parse_arguments(["Monza", "wet", "extra"])

    def test_invalid_condition(self):
        with pytest.raises(UsageError, match="'wet' or 'dry'"):
            parse_arguments(["Monza", "damp"])

    def test_options(self):
        args = parse_arguments(["--no-weather", "--no-cache", "--verbose",
                                "--config", "teams.json", "Spa", "dry"])
        assert args.no_weather and args.no_cache and args.verbose
        assert args.config == "teams.json"


class TestMain:
    """Test the full command-line run."""

    @pytest.mark.parametrize("argv", [[], ["Monza", "wet", "extra"], ["Monza", "sunny"]])
    def test_usage_errors_exit_1(self, argv, capsys):
        assert main(argv) == 1
        out = capsys.readouterr().out
        assert "Incorrect usage" in out or "unrecognized" in out
        assert "usage: gp-predictor" in out

    def test_successful_prediction(self, config_file, capsys):
        exit_code = main(["--config", str(config_file), "--no-weather", "Monza", "dry"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "The predicted winner is: Max Verstappen" in out
        assert "Predicted Grid:" in out

    def test_track_only_prints_note(self, config_file, capsys):
        assert main(["--config", str(config_file), "--no-weather", "Monza"]) == 0
        out = capsys.readouterr().out
        assert "Note: For more accurate race predictions" in out
        assert "usage: gp-predictor" in out
        assert "Examples:" in out

    def test_missing_config(self, tmp_path, capsys):
        exit_code = main(["--config", str(tmp_path / "missing.json"), "--no-weather", "Monza"])

        assert exit_code == 1
        assert "ConfigLoadError" in capsys.readouterr().err

    def test_interrupt_exits_130(self, config_file, capsys):
        with patch("gp_predictor.cli.PredictionEngine.predict", side_effect=KeyboardInterrupt):
            exit_code = main(["--config", str(config_file), "--no-weather", "Monza", "dry"])

        assert exit_code == 130
        assert "cancelled" in capsys.readouterr().err
