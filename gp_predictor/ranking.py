"""
Ranking module.

Turns driver points into a share of the field total and a predicted
finishing order.
"""

import logging
from typing import List

from gp_predictor.models import Driver


logger = logging.getLogger(__name__)


def calculate_percentages(drivers: List[Driver]) -> None:
    """
    Set each driver's percentage of the total points in the field.

    A field where nobody scored has no meaningful split, so every
    driver is given 0%.

    Args:
        drivers: Scored drivers (updated in place)
    """
    total_points = sum(driver.points for driver in drivers)

    if total_points == 0:
        if drivers:
            logger.warning("No driver scored any points; all percentages set to 0%")
        for driver in drivers:
            driver.percentage = 0.0
        return

    for driver in drivers:
        driver.percentage = driver.points / total_points * 100.0


def ranking_key(driver: Driver):
    """Sort key: most points first, then lowest race number."""
    return (-driver.points, driver.number)


def predict_positions(drivers: List[Driver]) -> List[Driver]:
    """
    Assign predicted finishing positions.

    Drivers are ordered by points, highest first. Drivers on equal
    points are ordered by race number so the output is reproducible.

    Args:
        drivers: Scored drivers (predicted_position updated in place)

    Returns:
        New list of the same drivers in predicted finishing order
    """
    standings = sorted(drivers, key=ranking_key)
    positions = {driver.number: position for position, driver in enumerate(standings, 1)}

    for driver in drivers:
        driver.predicted_position = positions[driver.number]

    return standings
