"""Result formatter for Grand Prix Predictor."""

from typing import List

from gp_predictor.models import Driver, PredictionError, PredictionResult, RaceField


# Column widths for the grid table
COLUMNS = [
    ("Pos", 4),
    ("Driver", 20),
    ("Team", 16),
    ("Points", 6),
    ("Probability", 11),
    ("Number", 6),
    ("Country", 14),
]

# Factor display names, in display order
FACTOR_NAMES = {
    'top_team': 'Top Team',
    'top_driver': 'Top Driver',
    'elite_driver': 'Elite Driver',
    'engine': 'Engine',
    'track_affinity': 'Track Affinity',
    'wet_condition': 'Wet Conditions',
    'overtaking': 'Overtaking (DRS)',
    'consistency': 'Consistency',
    'experience': 'Experience',
    'pit_stops': 'Pit Stops',
    'tire_strategy': 'Tire Strategy',
    'track_type': 'Track Type',
    'rain': 'Rain',
    'heat': 'Heat',
    'cold': 'Cold',
    'wind': 'Wind',
    'humidity': 'Humidity',
}


class ResultFormatter:
    """Formats prediction results for display."""

    def format_prediction(self, result: PredictionResult, verbose: bool = False) -> str:
        """
        Format predictions for console output.

        Args:
            result: The prediction result to format
            verbose: Whether to show per-driver factor breakdowns

        Returns:
            Formatted string ready for display
        """
        output = []

        # Header
        output.append("F1 Grand Prix Predictor")
        output.append("═" * 65)
        output.append(f"Track: {result.track or 'Not specified'}")
        output.append(f"Condition: {result.condition or 'Not specified'}")

        weather = result.weather
        if weather is not None:
            output.append(
                f"Weather: {weather.description}, {weather.temperature:.1f}°C, "
                f"humidity {weather.humidity:.0f}%, wind {weather.wind_speed:.1f} km/h, "
                f"rain {weather.rain_probability}% ({weather.source})"
            )
        output.append("")

        winner = result.winner
        if winner is None:
            output.append("No drivers configured, nothing to predict.")
            return "\n".join(output)

        output.append(
            f"The predicted winner is: {winner.name} "
            f"(with a {winner.percentage:.2f}% probability)"
        )
        output.append("")

        output.append("Predicted Grid:")
        output.append(self.format_table(result.standings, result.field))

        if verbose:
            output.append("")
            output.append("Scoring Breakdown:")
            output.append("─" * 65)
            for driver in result.standings:
                output.append(f"P{driver.predicted_position} {driver.name} ({driver.points} pts)")
                output.append(self.format_factors(driver))

        output.append("")
        output.append(f"Scoring policy: {'enhanced' if result.enhanced else 'base'}")
        output.append(f"Prediction generated: {result.generated_at.strftime('%Y-%m-%d %H:%M:%S')}")

        return "\n".join(output)

    def format_factors(self, driver: Driver) -> str:
        """
        Format the points each factor contributed to a driver's total.

        Args:
            driver: Scored driver

        Returns:
            Formatted string listing every non-zero factor
        """
        lines = []
        for key, display_name in FACTOR_NAMES.items():
            if key in driver.breakdown:
                lines.append(f"   • {display_name}: +{driver.breakdown[key]}")
        if not lines:
            lines.append("   • No scoring factors")
        return "\n".join(lines)

    def format_table(self, standings: List[Driver], race_field: RaceField) -> str:
        """
        Format the predicted grid as an ASCII table.

        Args:
            standings: Drivers in predicted finishing order
            race_field: Field used to resolve team names

        Returns:
            Formatted ASCII table string
        """
        widths = [width for _, width in COLUMNS]

        def border(left: str, middle: str, right: str) -> str:
            return left + middle.join("─" * (w + 2) for w in widths) + right

        def row(cells: List[str]) -> str:
            padded = [cell[:w].ljust(w) for cell, w in zip(cells, widths)]
            return "│ " + " │ ".join(padded) + " │"

        lines = [border("┌", "┬", "┐"), row([name for name, _ in COLUMNS]), border("├", "┼", "┤")]

        for driver in standings:
            lines.append(row([
                f"P{driver.predicted_position}",
                driver.name,
                race_field.team_for(driver).name,
                str(driver.points),
                f"{driver.percentage:.2f}%",
                f"#{driver.number}",
                driver.country,
            ]))

        lines.append(border("└", "┴", "┘"))
        return "\n".join(lines)

    def format_error(self, error: PredictionError) -> str:
        """
        Format prediction error for display.

        Args:
            error: PredictionError to format

        Returns:
            Formatted error message string
        """
        lines = []
        lines.append("═" * 65)
        lines.append(f"ERROR: {error.error_type}")
        lines.append("═" * 65)
        lines.append(f"\n{error.message}\n")

        if error.suggestions:
            lines.append("Suggestions:")
            for suggestion in error.suggestions:
                lines.append(f"  • {suggestion}")

        lines.append("\n" + "═" * 65)

        return "\n".join(lines)
