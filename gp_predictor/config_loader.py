"""
Configuration loading module.

Reads the team and driver configuration file and builds the RaceField
used for a prediction. Records missing optional ratings fall back to a
neutral mid-scale value rather than zero.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from gp_predictor.models import (
    Team, Driver, RaceField, ConfigLoadError, InvalidTeamReference
)


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "f1_config.json"
CONFIG_ENV_VAR = "GP_PREDICTOR_CONFIG"

RATING_MIN = 0
RATING_MAX = 10
DEFAULT_RATING = 5

# JSON key -> Team attribute
TEAM_RATINGS = {
    'pitStopEfficiency': 'pit_stop_efficiency',
    'tireStrategy': 'tire_strategy',
    'aerodynamics': 'aerodynamics',
}

# JSON key -> Driver attribute
DRIVER_RATINGS = {
    'overtakingAbility': 'overtaking_ability',
    'consistency': 'consistency',
    'experienceLevel': 'experience_level',
    'wetWeatherSkill': 'wet_weather_skill',
}


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Work out which configuration file to read.

    An explicit path wins, then the GP_PREDICTOR_CONFIG environment
    variable, then f1_config.json in the working directory.
    """
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path(DEFAULT_CONFIG_FILE)


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load the raw configuration document.

    Args:
        path: Configuration file path (see resolve_config_path)

    Returns:
        Parsed configuration with 'teams' and 'drivers' lists

    Raises:
        ConfigLoadError: If the file is missing, unparseable or lacks
            the 'teams'/'drivers' arrays
    """
    config_path = resolve_config_path(path)

    if not config_path.exists():
        raise ConfigLoadError(
            f"Configuration file not found: {config_path}",
            suggestions=[
                "Run from the directory containing f1_config.json",
                f"Pass --config or set {CONFIG_ENV_VAR} to the file location",
            ],
        )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Error loading JSON file {config_path}: {e}")
    except OSError as e:
        raise ConfigLoadError(f"Unable to read configuration file {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigLoadError("Configuration root must be a JSON object")

    for key in ('teams', 'drivers'):
        if not isinstance(data.get(key), list):
            raise ConfigLoadError(f"'{key}' must be an array")

    logger.info(
        f"Loaded configuration from {config_path}: "
        f"{len(data['teams'])} teams, {len(data['drivers'])} drivers"
    )
    return data


def _require(record: Dict[str, Any], key: str, kind: type, label: str) -> Any:
    if key not in record:
        raise ConfigLoadError(f"{label} is missing required field '{key}'")
    value = record[key]
    # bool is a subclass of int and must not pass as a number
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigLoadError(
            f"{label}: '{key}' must be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _optional_str(record: Dict[str, Any], key: str, label: str) -> str:
    value = record.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigLoadError(f"{label}: '{key}' must be str, got {type(value).__name__}")
    return value


def _optional_flag(record: Dict[str, Any], key: str, label: str) -> bool:
    value = record.get(key, False)
    if not isinstance(value, bool):
        raise ConfigLoadError(f"{label}: '{key}' must be a boolean")
    return value


def _rating(record: Dict[str, Any], key: str, label: str) -> int:
    if key not in record or record[key] is None:
        return DEFAULT_RATING
    value = record[key]
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigLoadError(f"{label}: '{key}' must be an integer rating")
    if not RATING_MIN <= value <= RATING_MAX:
        raise ConfigLoadError(
            f"{label}: '{key}' must be in [{RATING_MIN}, {RATING_MAX}], got {value}"
        )
    return value


def _parse_team(index: int, record: Any) -> Team:
    """Parse a team record from the configuration file."""
    label = f"Team entry {index}"
    if not isinstance(record, dict):
        raise ConfigLoadError(f"{label} must be an object")

    name = _require(record, 'name', str, label)
    label = f"{label} ({name})"

    ratings = {attr: _rating(record, key, label) for key, attr in TEAM_RATINGS.items()}
    return Team(
        name=name,
        engine=_require(record, 'engine', str, label),
        is_top_team=_optional_flag(record, 'isTopTeam', label),
        **ratings
    )


def _parse_driver(index: int, record: Any, team_count: int) -> Driver:
    """Parse a driver record from the configuration file."""
    label = f"Driver entry {index}"
    if not isinstance(record, dict):
        raise ConfigLoadError(f"{label} must be an object")

    name = _require(record, 'name', str, label)
    label = f"{label} ({name})"

    team_index = _require(record, 'teamIndex', int, label)
    if not 0 <= team_index < team_count:
        raise InvalidTeamReference(name, team_index, team_count)

    ratings = {attr: _rating(record, key, label) for key, attr in DRIVER_RATINGS.items()}
    return Driver(
        name=name,
        number=_require(record, 'number', int, label),
        country=_optional_str(record, 'country', label),
        favorite_track=_optional_str(record, 'favoriteTrack', label),
        home_track=_optional_str(record, 'homeTrack', label),
        team_index=team_index,
        is_top_driver=_optional_flag(record, 'isTopDriver', label),
        is_elite_driver=_optional_flag(record, 'isEliteDriver', label),
        **ratings
    )


def build_field(config: Dict[str, Any]) -> RaceField:
    """
    Turn configuration records into Team and Driver entities.

    Args:
        config: Raw configuration as returned by load_config

    Returns:
        RaceField with every driver's team reference resolved

    Raises:
        InvalidTeamReference: If a driver's teamIndex is out of range
        ConfigLoadError: If a record is malformed or race numbers repeat
    """
    teams: List[Team] = [
        _parse_team(i, record) for i, record in enumerate(config.get('teams', []))
    ]

    drivers: List[Driver] = []
    seen_numbers: Dict[int, str] = {}
    for i, record in enumerate(config.get('drivers', [])):
        driver = _parse_driver(i, record, len(teams))
        if driver.number in seen_numbers:
            raise ConfigLoadError(
                f"Race number {driver.number} is used by both "
                f"'{seen_numbers[driver.number]}' and '{driver.name}'"
            )
        seen_numbers[driver.number] = driver.name
        driver.reset()
        drivers.append(driver)

    logger.info(f"Built field of {len(drivers)} drivers across {len(teams)} teams")
    return RaceField(teams=teams, drivers=drivers)


def load_field(path: Optional[Union[str, Path]] = None) -> RaceField:
    """Load the configuration file and build the race field in one step."""
    return build_field(load_config(path))
