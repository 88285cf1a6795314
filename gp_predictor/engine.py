"""
Prediction engine orchestrator module.

Coordinates configuration loading, weather lookup, scoring and ranking
to predict the finishing order of a grand prix.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from gp_predictor.cache import DataCache
from gp_predictor.config_loader import load_field
from gp_predictor.formatter import ResultFormatter
from gp_predictor.models import PredictionError, PredictionResult, WeatherSnapshot
from gp_predictor.ranking import calculate_percentages, predict_positions
from gp_predictor.scoring import ScoringEngine
from gp_predictor.weather import WeatherProvider


logger = logging.getLogger(__name__)


class PredictionEngine:
    """
    Orchestrates the race prediction process.

    Loads the field, fetches weather for the track, scores every driver
    and ranks the field.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        use_weather: bool = True,
        use_cache: bool = True,
        cache_dir: str = ".gp_cache",
        verbose: bool = False,
        weather_provider: Optional[WeatherProvider] = None
    ):
        """
        Initialize the prediction engine.

        Args:
            config_path: Team/driver configuration file (see config_loader)
            use_weather: Whether to look up weather for the track
            use_cache: Whether to cache live weather responses
            cache_dir: Directory for cache storage (default: ".gp_cache")
            verbose: Whether to show progress on stderr
            weather_provider: Provider to use instead of the default one
        """
        self.config_path = config_path
        self.use_weather = use_weather
        self.verbose = verbose

        if weather_provider is None and use_weather:
            cache = DataCache(cache_dir) if use_cache else None
            weather_provider = WeatherProvider(cache=cache)
        self.weather_provider = weather_provider

        self.scoring = ScoringEngine()
        self.formatter = ResultFormatter()

        logger.info("Prediction engine initialized")
        logger.info(f"Weather enabled: {use_weather}, cache enabled: {use_cache}")

    def _show_progress(self, message: str) -> None:
        """
        Display progress indicator to user.

        Args:
            message: Progress message to display
        """
        if self.verbose:
            print(f"[*] {message}", file=sys.stderr)
        logger.info(message)

    def _get_weather(self, track: str) -> Optional[WeatherSnapshot]:
        if not track or self.weather_provider is None:
            return None
        self._show_progress(f"Fetching weather for {track}...")
        return self.weather_provider.fetch(track)

    def predict(self, track: str = "", condition: str = "") -> PredictionResult:
        """
        Predict the finishing order for a race.

        Args:
            track: Track or country name ("" if unknown)
            condition: "wet", "dry" or "" if unknown

        Returns:
            PredictionResult with drivers in predicted order

        Raises:
            ConfigLoadError: If the configuration cannot be loaded
            InvalidTeamReference: If a driver references a missing team
            PredictionError: If anything else goes wrong
        """
        try:
            self._show_progress("Loading teams and drivers...")
            race_field = load_field(self.config_path)

            weather = self._get_weather(track)

            self._show_progress("Calculating driver points...")
            enhanced = self.scoring.score_field(race_field, track, condition, weather)

            self._show_progress("Ranking the field...")
            calculate_percentages(race_field.drivers)
            standings = predict_positions(race_field.drivers)

            if standings:
                logger.info(f"Predicted winner: {standings[0].name} ({standings[0].points} pts)")

            return PredictionResult(
                track=track,
                condition=condition,
                weather=weather,
                standings=standings,
                field=race_field,
                enhanced=enhanced,
                generated_at=datetime.now(),
            )

        except PredictionError:
            # Re-raise prediction errors as-is
            raise

        except Exception as e:
            logger.error(f"Unexpected error during prediction: {e}", exc_info=True)
            raise PredictionError(
                error_type="UnexpectedError",
                message=f"An unexpected error occurred: {str(e)}",
                suggestions=[
                    "Check the configuration file contents",
                    "Run with --verbose for more details",
                ],
                recoverable=False
            )

    def format_result(self, result: PredictionResult) -> str:
        """Format prediction result for display."""
        return self.formatter.format_prediction(result, verbose=self.verbose)

    def format_error(self, error: PredictionError) -> str:
        """Format prediction error for display."""
        return self.formatter.format_error(error)
