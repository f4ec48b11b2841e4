#!/usr/bin/env python3
"""
Transform demos

This script drives the tuple and transform core with two small programs:
a projectile moving under gravity and wind, and the twelve hour marks of a
clock face placed by rotation, scaling and translation. Both write the
computed coordinates to a JSON file.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from raytracer import config as config_module
from raytracer.tolerance import DEFAULT_MARGIN, FloatMargin
from raytracer.transforms import rotation_z, scaling, translation
from raytracer.tuples import Point, Vector


logger = logging.getLogger("demo")


@dataclass(frozen=True)
class Projectile:
    position: Point
    velocity: Vector


@dataclass(frozen=True)
class Environment:
    gravity: Vector
    wind: Vector


def tick(projectile: Projectile, environment: Environment) -> Projectile:
    """Advance the projectile by one time step.

    Args:
        projectile: Current position and velocity
        environment: Gravity and wind acting on the projectile

    Returns:
        Projectile after the step
    """
    return Projectile(
        position=projectile.position + projectile.velocity,
        velocity=projectile.velocity + environment.gravity + environment.wind,
    )


def simulate_projectile(settings: Dict) -> List[Point]:
    """Track a projectile until it reaches the ground.

    Args:
        settings: ``projectile`` section of the configuration

    Returns:
        Positions visited while the projectile was above y = 0
    """
    projectile = Projectile(
        position=Point(*settings["start"]),
        velocity=Vector(*settings["direction"]).normalize() * settings["speed"],
    )
    environment = Environment(
        gravity=Vector(*settings["gravity"]),
        wind=Vector(*settings["wind"]),
    )
    max_ticks = int(settings.get("max_ticks", 10000))

    positions = []
    with tqdm(total=max_ticks, desc="Simulating projectile") as progress:
        while projectile.position.y > 0 and len(positions) < max_ticks:
            positions.append(projectile.position)
            projectile = tick(projectile, environment)
            progress.update(1)

    if projectile.position.y > 0:
        logger.warning(f"Projectile still airborne after {max_ticks} ticks")

    logger.info(f"Projectile landed after {len(positions)} ticks")
    return positions


def clock_face(settings: Dict, margin: FloatMargin = DEFAULT_MARGIN) -> List[Point]:
    """Place the hour marks of a clock face.

    Each mark starts at twelve o'clock on the unit circle, is rotated about
    z to its hour, scaled to the radius and moved to the centre. Marks that
    do not land on the circle within the margin are reported.

    Args:
        settings: ``clock`` section of the configuration
        margin: Tolerance for the distance-from-centre check

    Returns:
        One point per hour, starting at one o'clock
    """
    center_x, center_y = settings["center"]
    radius = settings["radius"]
    hours = int(settings.get("hours", 12))

    twelve = Point(0, 1, 0)
    place = translation(center_x, center_y, 0) @ scaling(radius, radius, 0)

    center = Point(center_x, center_y, 0)
    marks = []
    for hour in tqdm(range(1, hours + 1), desc="Placing hour marks"):
        mark = place @ rotation_z(2 * math.pi / hours * hour) @ twelve
        distance = (mark - center).magnitude()
        if not margin.approx_eq(distance, radius):
            logger.warning(f"Hour {hour} mark is {distance:.5f} from the centre, expected {radius}")
        marks.append(mark)

    logger.info(f"Placed {len(marks)} hour marks")
    return marks


def save_points(points: Sequence[Point], output_path: str) -> None:
    """Write points to a JSON file as a list of [x, y, z] triples.

    Args:
        points: Points to save
        output_path: Path of the JSON file
    """
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump([[p.x, p.y, p.z] for p in points], f, indent=2)

    logger.info(f"Saved {len(points)} points to {output_path}")


def main(argv: Optional[Sequence[str]] = None):
    """Main function to parse arguments and run a demo."""
    parser = argparse.ArgumentParser(description="Transform demos")
    parser.add_argument(
        "demo", choices=["projectile", "clock"],
        help="Demo to run"
    )
    parser.add_argument(
        "--output", "-o", dest="output_path", default=None,
        help="Path of the JSON output file (default: results/<demo>.json)"
    )
    parser.add_argument(
        "--config", "-c", dest="config_path", default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--verbose", "-v", dest="verbose", action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    # Set up logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
        handlers=[
            logging.StreamHandler(),
        ],
    )

    output_path = args.output_path or os.path.join("results", f"{args.demo}.json")

    try:
        config = config_module.load_config(args.config_path)
        if args.demo == "projectile":
            points = simulate_projectile(config["projectile"])
        else:
            points = clock_face(config["clock"], config_module.margin_from_config(config))
        save_points(points, output_path)
    except Exception as e:
        logger.exception(f"Error running {args.demo} demo: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
