"""
Scoring engine module.

Awards integer points to every driver in the field. The base policy
rewards team and driver caliber, engine supplier, track affinity and
wet-race pedigree. When a track or weather reading is available the
enhanced policy adds driver ratings, team operations, track character
and weather effects on top of the base points.
"""

import logging
from enum import IntEnum
from typing import Dict, Optional

from gp_predictor.models import Driver, RaceField, Team, WeatherSnapshot


logger = logging.getLogger(__name__)


class TrackType(IntEnum):
    """Circuit character used for the track-type bonus."""
    STREET = 1
    HIGH_SPEED = 2
    TECHNICAL = 3


# Lower-cased track name -> DRS effectiveness
DRS_EFFECTIVENESS = {
    'monza': 8, 'spa': 8, 'baku': 8, 'jeddah': 8,
    'silverstone': 6, 'austria': 6, 'bahrain': 6,
    'monaco': 3, 'hungary': 3, 'singapore': 3,
}
DEFAULT_DRS_EFFECTIVENESS = 5

TRACK_TYPES = {
    'monaco': TrackType.STREET,
    'singapore': TrackType.STREET,
    'baku': TrackType.STREET,
    'jeddah': TrackType.STREET,
    'monza': TrackType.HIGH_SPEED,
    'spa': TrackType.HIGH_SPEED,
    'silverstone': TrackType.HIGH_SPEED,
}


def track_key(track: Optional[str]) -> str:
    """Normalize a track name for case-insensitive comparison."""
    return (track or "").strip().lower()


def get_drs_effectiveness(track: Optional[str]) -> int:
    """Return how much DRS helps overtaking at a track (3, 5, 6 or 8)."""
    return DRS_EFFECTIVENESS.get(track_key(track), DEFAULT_DRS_EFFECTIVENESS)


def get_track_type(track: Optional[str]) -> TrackType:
    """Classify a track; unknown tracks are treated as technical."""
    return TRACK_TYPES.get(track_key(track), TrackType.TECHNICAL)


class ScoringEngine:
    """
    Computes heuristic race points for each driver.

    Every rule is additive; no rule cancels another. Points are integers
    and every division truncates.
    """

    # Base policy
    POINTS_TOP_TEAM = 10
    POINTS_TOP_DRIVER = 12
    POINTS_ELITE_DRIVER = 15
    POINTS_ELITE_ENGINE = 5
    POINTS_FAVORITE_AND_HOME = 12
    POINTS_FAVORITE_OR_HOME = 6
    POINTS_WET_TOP_DRIVER = 6

    # Exact, case-sensitive engine supplier names
    ELITE_ENGINES = frozenset({"Mercedes", "Ferrari", "Honda RBPT"})

    # Weather thresholds
    RAIN_THRESHOLD = 30
    HOT_TEMPERATURE = 30.0
    COLD_TEMPERATURE = 15.0
    WIND_THRESHOLD = 20.0
    HUMIDITY_THRESHOLD = 80.0

    def calculate_base_points(
        self,
        driver: Driver,
        team: Team,
        track: Optional[str] = None,
        condition: Optional[str] = None
    ) -> Dict[str, int]:
        """
        Score a driver under the base policy.

        Args:
            driver: Driver to score
            team: The driver's team
            track: Track name, if known
            condition: Race condition ("wet" or "dry"), if known

        Returns:
            Mapping of factor name to points awarded (zero factors omitted)
        """
        factors: Dict[str, int] = {}

        if team.is_top_team:
            factors['top_team'] = self.POINTS_TOP_TEAM

        if driver.is_top_driver:
            factors['top_driver'] = self.POINTS_TOP_DRIVER

        if driver.is_elite_driver:
            factors['elite_driver'] = self.POINTS_ELITE_DRIVER

        if team.engine in self.ELITE_ENGINES:
            factors['engine'] = self.POINTS_ELITE_ENGINE

        current = track_key(track)
        if current:
            is_favorite = current == track_key(driver.favorite_track)
            is_home = current in (track_key(driver.home_track), track_key(driver.country))

            if is_favorite and is_home:
                factors['track_affinity'] = self.POINTS_FAVORITE_AND_HOME
            elif is_favorite or is_home:
                factors['track_affinity'] = self.POINTS_FAVORITE_OR_HOME

        if condition == "wet" and driver.is_top_driver:
            factors['wet_condition'] = self.POINTS_WET_TOP_DRIVER

        return factors

    def calculate_enhanced_points(
        self,
        driver: Driver,
        team: Team,
        track: Optional[str] = None,
        weather: Optional[WeatherSnapshot] = None
    ) -> Dict[str, int]:
        """
        Score the additional enhanced-policy terms for a driver.

        These are awarded on top of calculate_base_points.

        Args:
            driver: Driver to score
            team: The driver's team
            track: Track name, if known
            weather: Weather at the circuit, if known

        Returns:
            Mapping of factor name to extra points (zero factors omitted)
        """
        drs = get_drs_effectiveness(track)
        track_type = get_track_type(track)

        factors = {
            'overtaking': (driver.overtaking_ability * drs) // 10,
            'consistency': driver.consistency,
            'experience': driver.experience_level // 2,
            'pit_stops': team.pit_stop_efficiency // 2,
            'tire_strategy': team.tire_strategy // 2,
        }

        if track_type == TrackType.HIGH_SPEED:
            factors['track_type'] = team.aerodynamics // 2
        elif track_type == TrackType.STREET:
            factors['track_type'] = driver.overtaking_ability // 2

        if weather is not None:
            factors.update(self.calculate_weather_points(driver, team, weather))

        return {name: points for name, points in factors.items() if points}

    def calculate_weather_points(
        self,
        driver: Driver,
        team: Team,
        weather: WeatherSnapshot
    ) -> Dict[str, int]:
        """Score the weather-dependent enhanced terms."""
        factors: Dict[str, int] = {}

        if weather.rain_probability > self.RAIN_THRESHOLD:
            factors['rain'] = (driver.wet_weather_skill * weather.rain_probability) // 100

        if weather.temperature > self.HOT_TEMPERATURE:
            factors['heat'] = team.tire_strategy // 3
        elif weather.temperature < self.COLD_TEMPERATURE:
            factors['cold'] = driver.experience_level // 3

        if weather.wind_speed > self.WIND_THRESHOLD:
            factors['wind'] = team.aerodynamics // 4

        if weather.humidity > self.HUMIDITY_THRESHOLD:
            factors['humidity'] = driver.consistency // 3

        return factors

    def score_field(
        self,
        race_field: RaceField,
        track: Optional[str] = None,
        condition: Optional[str] = None,
        weather: Optional[WeatherSnapshot] = None
    ) -> bool:
        """
        Reset and recompute points for every driver in the field.

        The enhanced policy is used when a track is named or weather is
        supplied; otherwise only the base policy applies.

        Args:
            race_field: Teams and drivers to score (drivers updated in place)
            track: Track name, if known
            condition: Race condition ("wet" or "dry"), if known
            weather: Weather at the circuit, if known

        Returns:
            True if the enhanced policy was applied
        """
        track = (track or "").strip()
        enhanced = bool(track) or weather is not None
        logger.info(f"Scoring {len(race_field.drivers)} drivers "
                    f"({'enhanced' if enhanced else 'base'} policy)")

        for driver in race_field.drivers:
            driver.reset()
            team = race_field.team_for(driver)

            breakdown = self.calculate_base_points(driver, team, track, condition)
            if enhanced:
                for name, points in self.calculate_enhanced_points(
                    driver, team, track, weather
                ).items():
                    breakdown[name] = breakdown.get(name, 0) + points

            driver.breakdown = breakdown
            driver.points = sum(breakdown.values())
            logger.debug(f"{driver.name}: {driver.points} points {breakdown}")

        return enhanced
