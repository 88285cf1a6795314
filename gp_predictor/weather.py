"""
Weather provider module.

Looks up current conditions for a circuit from the OpenWeatherMap API.
Whenever a live lookup is not possible (no API key, network failure,
timeout or an unexpected payload) a simulated reading is returned
instead, so callers always receive a WeatherSnapshot.
"""

import logging
import math
import os
import random
from typing import Any, Dict, Optional

import requests

from gp_predictor.cache import DataCache
from gp_predictor.models import WeatherSnapshot


logger = logging.getLogger(__name__)


# description, temperature, humidity, wind speed, rain probability.
# Each numeric entry is (base, spread): value = base + randrange(spread)
SIMULATED_CLIMATES = {
    'monaco': ("partly cloudy", (22, 8), (65, 20), (10, 15), (20, 30)),
    'silverstone': ("overcast", (15, 10), (70, 25), (15, 20), (40, 40)),
    'great britain': ("overcast", (15, 10), (70, 25), (15, 20), (40, 40)),
    'singapore': ("humid", (28, 6), (85, 10), (5, 10), (60, 30)),
}
DEFAULT_CLIMATE = ("clear", (20, 15), (50, 30), (8, 12), (10, 40))


def simulate_weather(location: str, rng: Optional[random.Random] = None) -> WeatherSnapshot:
    """
    Generate plausible weather for a circuit without any network access.

    Args:
        location: Track or country name (case-insensitive)
        rng: Random source; pass a seeded instance for repeatable output

    Returns:
        Simulated WeatherSnapshot
    """
    rng = rng or random.Random()
    description, temp, humidity, wind, rain = SIMULATED_CLIMATES.get(
        (location or "").strip().lower(), DEFAULT_CLIMATE
    )

    return WeatherSnapshot(
        description=description,
        temperature=float(temp[0] + rng.randrange(temp[1])),
        humidity=float(humidity[0] + rng.randrange(humidity[1])),
        wind_speed=float(wind[0] + rng.randrange(wind[1])),
        rain_probability=rain[0] + rng.randrange(rain[1]),
        source="simulated",
    )


def parse_weather_response(data: Dict[str, Any]) -> WeatherSnapshot:
    """
    Convert an OpenWeatherMap current-weather payload into a snapshot.

    Missing readings fall back to mild defaults. Rain probability is
    estimated from the reported condition and then blended with cloud
    cover, since the current-weather endpoint does not report one.

    Raises:
        ValueError: If the payload is not a JSON object
    """
    if not isinstance(data, dict):
        raise ValueError("Weather response is not a JSON object")

    main = _section(data, 'main')
    wind = _section(data, 'wind')
    conditions = data.get('weather') or []
    clouds = _section(data, 'clouds')

    temperature = _number(main.get('temp'), 20.0)
    humidity = _number(main.get('humidity'), 50.0)

    wind_speed = _number(wind.get('speed'), None)
    wind_speed = wind_speed * 3.6 if wind_speed is not None else 10.0  # m/s -> km/h

    description = "clear"
    rain_probability = 10
    if isinstance(conditions, list) and conditions and isinstance(conditions[0], dict):
        current = conditions[0]
        if isinstance(current.get('description'), str):
            description = current['description']

        headline = current.get('main') if isinstance(current.get('main'), str) else ""
        if any(word in headline for word in ("Rain", "Drizzle", "Thunderstorm")):
            rain_probability = 80
        elif "Clouds" in headline:
            rain_probability = 30

    cloud_cover = _number(clouds.get('all'), None)
    if cloud_cover is not None:
        rain_probability = (rain_probability + int(cloud_cover) // 2) // 2

    return WeatherSnapshot(
        description=description,
        temperature=temperature,
        humidity=humidity,
        wind_speed=wind_speed,
        rain_probability=rain_probability,
        source="openweathermap",
    )


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _number(value: Any, default: Optional[float]) -> Optional[float]:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except OverflowError:
        return default
    return number if math.isfinite(number) else default


class WeatherProvider:
    """
    Supplies a WeatherSnapshot for a circuit.

    Makes a single live request per lookup. Failures are not retried;
    the simulated generator is used instead.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
    REQUEST_TIMEOUT = 10  # seconds
    CACHE_TTL = 1800  # 30 minutes

    def __init__(
        self,
        api_key: Optional[str] = None,
        cache: Optional[DataCache] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the weather provider.

        Args:
            api_key: OpenWeatherMap API key (defaults to OPENWEATHER_API_KEY env var)
            cache: DataCache for live responses (no caching if None)
            rng: Random source for simulated weather
        """
        self.api_key = api_key if api_key is not None else os.environ.get("OPENWEATHER_API_KEY", "")
        self.cache = cache
        self.rng = rng or random.Random()

    def fetch(self, location: str) -> WeatherSnapshot:
        """
        Get weather for a track or country name.

        Args:
            location: Name passed to the weather service

        Returns:
            Live, cached or simulated WeatherSnapshot (never raises)
        """
        if not self.api_key:
            logger.info("No weather API key configured, using simulated weather")
            return simulate_weather(location, self.rng)

        cache_key = f"weather_{location}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                try:
                    snapshot = parse_weather_response(cached)
                    snapshot.source = "cache"
                    logger.info(f"Cache hit: {cache_key}")
                    return snapshot
                except ValueError as e:
                    logger.warning(f"Ignoring unusable cached weather for {location}: {e}")

        try:
            data = self._request(location)
            snapshot = parse_weather_response(data)
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Live weather unavailable for {location} ({e}), using simulated weather")
            return simulate_weather(location, self.rng)

        if self.cache is not None:
            self.cache.set(cache_key, data, self.CACHE_TTL)

        logger.info(
            f"Weather for {location}: {snapshot.description}, "
            f"{snapshot.temperature:.1f}C, rain {snapshot.rain_probability}%"
        )
        return snapshot

    def _request(self, location: str) -> Dict[str, Any]:
        """Perform the HTTP request and return the decoded JSON body."""
        logger.info(f"Fetching weather from API for {location}")
        response = requests.get(
            self.BASE_URL,
            params={"q": location, "appid": self.api_key, "units": "metric"},
            timeout=self.REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        return response.json()
