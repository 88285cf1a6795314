"""Shared fixtures for Grand Prix Predictor tests."""

import json

import pytest

from gp_predictor.models import Driver, RaceField, Team, WeatherSnapshot


def make_team(name="Test Team", engine="Renault", is_top_team=False, **ratings) -> Team:
    return Team(name=name, engine=engine, is_top_team=is_top_team, **ratings)


def make_driver(
    name="Test Driver",
    number=99,
    team_index=0,
    country="",
    favorite_track="",
    home_track="",
    **kwargs
) -> Driver:
    return Driver(
        name=name,
        number=number,
        country=country,
        favorite_track=favorite_track,
        home_track=home_track,
        team_index=team_index,
        **kwargs
    )


def make_weather(
    temperature=20.0,
    humidity=50.0,
    wind_speed=10.0,
    rain_probability=10,
    description="clear"
) -> WeatherSnapshot:
    return WeatherSnapshot(
        description=description,
        temperature=temperature,
        humidity=humidity,
        wind_speed=wind_speed,
        rain_probability=rain_probability,
    )


@pytest.fixture
def sample_config():
    """Small but complete configuration document."""
    return {
        "teams": [
            {"name": "Red Bull Racing", "engine": "Honda RBPT", "isTopTeam": True,
             "pitStopEfficiency": 10, "tireStrategy": 8, "aerodynamics": 9},
            {"name": "Alpine", "engine": "Renault", "isTopTeam": False},
        ],
        "drivers": [
            {"name": "Max Verstappen", "number": 1, "country": "Netherlands",
             "favoriteTrack": "Spa", "homeTrack": "Zandvoort", "teamIndex": 0,
             "isTopDriver": True, "isEliteDriver": True, "overtakingAbility": 10,
             "consistency": 10, "experienceLevel": 9, "wetWeatherSkill": 10},
            {"name": "Pierre Gasly", "number": 10, "country": "France",
             "favoriteTrack": "Monza", "homeTrack": "Paul Ricard", "teamIndex": 1},
            {"name": "Franco Colapinto", "number": 43, "country": "Argentina",
             "favoriteTrack": "Baku", "homeTrack": "Buenos Aires", "teamIndex": 1},
        ],
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """sample_config written to a temporary JSON file."""
    path = tmp_path / "f1_config.json"
    path.write_text(json.dumps(sample_config), encoding="utf-8")
    return path


@pytest.fixture
def race_field():
    """Two teams, three drivers, built directly from the models."""
    teams = [
        make_team("Top Team", engine="Mercedes", is_top_team=True),
        make_team("Back Marker", engine="Renault"),
    ]
    drivers = [
        make_driver("Ace", number=1, team_index=0, is_top_driver=True, is_elite_driver=True),
        make_driver("Midfield", number=2, team_index=1),
        make_driver("Rookie", number=3, team_index=1, overtaking_ability=2,
                    consistency=2, experience_level=1, wet_weather_skill=2),
    ]
    return RaceField(teams=teams, drivers=drivers)
