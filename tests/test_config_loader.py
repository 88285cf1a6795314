"""Tests for configuration loading and the entity builder."""

import json
from pathlib import Path

import pytest

from gp_predictor.config_loader import build_field, load_config, load_field
from gp_predictor.models import ConfigLoadError, InvalidTeamReference


REFERENCE_CONFIG = Path(__file__).resolve().parent.parent / "f1_config.json"


def _write(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content if isinstance(content, str) else json.dumps(content),
                    encoding="utf-8")
    return path


class TestLoadConfig:
    """Test reading the configuration file."""

    def test_loads_file(self, config_file):
        data = load_config(config_file)
        assert len(data["teams"]) == 2
        assert len(data["drivers"]) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadError, match="not found"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        with pytest.raises(ConfigLoadError, match="Error loading JSON"):
            load_config(_write(tmp_path, "{teams: ["))

    def test_root_must_be_object(self, tmp_path):
        with pytest.raises(ConfigLoadError, match="JSON object"):
            load_config(_write(tmp_path, [1, 2]))

    @pytest.mark.parametrize("content,message", [
        ({"drivers": []}, "'teams' must be an array"),
        ({"teams": {}, "drivers": []}, "'teams' must be an array"),
        ({"teams": []}, "'drivers' must be an array"),
        ({"teams": [], "drivers": "none"}, "'drivers' must be an array"),
    ])
    def test_arrays_required(self, tmp_path, content, message):
        with pytest.raises(ConfigLoadError, match=message):
            load_config(_write(tmp_path, content))

    def test_env_var_path(self, config_file, monkeypatch):
        monkeypatch.setenv("GP_PREDICTOR_CONFIG", str(config_file))
        assert len(load_config()["drivers"]) == 3

    def test_reference_config(self):
        race_field = load_field(REFERENCE_CONFIG)
        assert len(race_field.teams) == 10
        assert len(race_field.drivers) == 20


class TestBuildField:
    """Test turning records into teams and drivers."""

    def test_builds_entities(self, sample_config):
        race_field = build_field(sample_config)

        max_v = race_field.drivers[0]
        assert max_v.name == "Max Verstappen"
        assert max_v.is_top_driver and max_v.is_elite_driver
        assert max_v.wet_weather_skill == 10
        assert race_field.team_for(max_v).name == "Red Bull Racing"
        assert race_field.team_for(race_field.drivers[2]).name == "Alpine"

    def test_missing_ratings_default_to_mid_scale(self, sample_config):
        race_field = build_field(sample_config)

        alpine = race_field.teams[1]
        assert (alpine.pit_stop_efficiency, alpine.tire_strategy, alpine.aerodynamics) == (5, 5, 5)

        gasly = race_field.drivers[1]
        assert gasly.overtaking_ability == 5
        assert gasly.consistency == 5
        assert gasly.experience_level == 5
        assert gasly.wet_weather_skill == 5
        assert gasly.is_top_driver is False

    def test_derived_fields_start_empty(self, sample_config):
        for driver in build_field(sample_config).drivers:
            assert driver.points == 0
            assert driver.percentage == 0.0
            assert driver.predicted_position == 0

    @pytest.mark.parametrize("team_index", [2, -1, 50])
    def test_invalid_team_reference(self, sample_config, team_index):
        sample_config["drivers"][1]["teamIndex"] = team_index
        with pytest.raises(InvalidTeamReference) as exc_info:
            build_field(sample_config)
        assert exc_info.value.driver_name == "Pierre Gasly"
        assert exc_info.value.team_index == team_index

    def test_no_teams_means_every_reference_is_invalid(self, sample_config):
        sample_config["teams"] = []
        with pytest.raises(InvalidTeamReference):
            build_field(sample_config)

    def test_duplicate_race_numbers(self, sample_config):
        sample_config["drivers"][2]["number"] = 10
        with pytest.raises(ConfigLoadError, match="Race number 10"):
            build_field(sample_config)

    @pytest.mark.parametrize("key", ["name", "number", "teamIndex"])
    def test_driver_required_fields(self, sample_config, key):
        del sample_config["drivers"][0][key]
        with pytest.raises(ConfigLoadError, match=key):
            build_field(sample_config)

    def test_team_requires_engine(self, sample_config):
        del sample_config["teams"][0]["engine"]
        with pytest.raises(ConfigLoadError, match="engine"):
            build_field(sample_config)

    def test_rating_out_of_range(self, sample_config):
        sample_config["drivers"][0]["consistency"] = 11
        with pytest.raises(ConfigLoadError, match="consistency"):
            build_field(sample_config)

    def test_rating_must_be_integer(self, sample_config):
        sample_config["teams"][0]["aerodynamics"] = True
        with pytest.raises(ConfigLoadError, match="aerodynamics"):
            build_field(sample_config)

    def test_optional_strings_default_empty(self, sample_config):
        del sample_config["drivers"][1]["country"]
        del sample_config["drivers"][1]["homeTrack"]
        gasly = build_field(sample_config).drivers[1]
        assert gasly.country == ""
        assert gasly.home_track == ""

    def test_field_size_is_not_capped(self):
        config = {
            "teams": [{"name": f"Team {i}", "engine": "Ferrari"} for i in range(15)],
            "drivers": [
                {"name": f"Driver {i}", "number": i, "teamIndex": i % 15}
                for i in range(30)
            ],
        }
        race_field = build_field(config)
        assert len(race_field.teams) == 15
        assert len(race_field.drivers) == 30
