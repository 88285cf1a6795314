"""Data models for Grand Prix Predictor."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, List


@dataclass
class Team:
    """Represents a constructor entered in the race weekend."""
    name: str
    engine: str
    is_top_team: bool = False
    pit_stop_efficiency: int = 5  # 0-10
    tire_strategy: int = 5  # 0-10
    aerodynamics: int = 5  # 0-10


@dataclass
class Driver:
    """Represents a driver and the scores derived for the current prediction."""
    name: str
    number: int
    country: str
    favorite_track: str
    home_track: str
    team_index: int  # Position of the driver's team in RaceField.teams
    is_top_driver: bool = False
    is_elite_driver: bool = False
    overtaking_ability: int = 5
    consistency: int = 5
    experience_level: int = 5
    wet_weather_skill: int = 5

    # Derived during a prediction pass
    points: int = 0
    percentage: float = 0.0
    predicted_position: int = 0
    breakdown: Dict[str, int] = field(default_factory=dict)

    def reset(self) -> None:
        """Clear everything derived by a previous scoring pass."""
        self.points = 0
        self.percentage = 0.0
        self.predicted_position = 0
        self.breakdown = {}


@dataclass
class RaceField:
    """Teams and drivers built from configuration for a single invocation."""
    teams: List[Team]
    drivers: List[Driver]

    def team_for(self, driver: Driver) -> Team:
        """Return the team a driver races for."""
        return self.teams[driver.team_index]


@dataclass
class WeatherSnapshot:
    """Weather at the circuit, consumed once per scoring pass."""
    description: str
    temperature: float  # Celsius
    humidity: float  # percent
    wind_speed: float  # km/h
    rain_probability: int  # 0-100
    source: str = "simulated"


@dataclass
class PredictionResult:
    """Represents the complete predicted finishing order for a race."""
    track: str
    condition: str
    weather: Optional[WeatherSnapshot]
    standings: List[Driver]  # Drivers in predicted finishing order
    field: RaceField
    enhanced: bool
    generated_at: datetime

    @property
    def winner(self) -> Optional[Driver]:
        """Driver predicted to finish first, if the field is not empty."""
        return self.standings[0] if self.standings else None


@dataclass
class PredictionError(Exception):
    """Represents an error that occurred during prediction."""
    error_type: str
    message: str
    suggestions: List[str]
    recoverable: bool

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class ConfigLoadError(PredictionError):
    """Configuration file is missing, unreadable or malformed."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        super().__init__(
            error_type="ConfigLoadError",
            message=message,
            suggestions=suggestions or [
                "Check that the configuration file exists and is readable",
                "Validate the file as JSON",
                "Make sure it defines 'teams' and 'drivers' arrays",
            ],
            recoverable=False,
        )


class InvalidTeamReference(PredictionError):
    """A driver record points at a team index that does not exist."""

    def __init__(self, driver_name: str, team_index: int, team_count: int):
        self.driver_name = driver_name
        self.team_index = team_index
        super().__init__(
            error_type="InvalidTeamReference",
            message=(
                f"Driver '{driver_name}' references team index {team_index}, "
                f"but only {team_count} teams are configured"
            ),
            suggestions=[
                f"Use a teamIndex between 0 and {max(team_count - 1, 0)}",
                "Team indices are zero-based positions in the 'teams' array",
            ],
            recoverable=False,
        )


class UsageError(PredictionError):
    """Command-line arguments could not be interpreted."""

    def __init__(self, message: str):
        super().__init__(
            error_type="UsageError",
            message=message,
            suggestions=[],
            recoverable=True,
        )
