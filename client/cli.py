"""
Render the current workouts to a standalone HTML map.

Usage:
    python -m client -o workouts.html
    python -m client --api-url http://localhost:8001 --lat 46.2 --lng 7.4
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence

from client.adapters import FixedGeolocation, LoggingNotifier
from client.api_client import WorkoutApiClient
from client.folium_map import FoliumMapWidget
from client.presentation import PresentationSync
from client.settings import ClientSettings, get_client_settings
from client.state_store import WorkoutStore
from domain.models import Coordinates

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render workouts on an HTML map")
    parser.add_argument(
        "-o", "--output", default="workouts.html", help="Output HTML file path"
    )
    parser.add_argument("--api-url", help="Workout API base URL (overrides settings)")
    parser.add_argument("--lat", type=float, help="Latitude to center the map on")
    parser.add_argument("--lng", type=float, help="Longitude to center the map on")
    return parser


def _position(args: argparse.Namespace, settings: ClientSettings) -> Coordinates:
    if args.lat is None or args.lng is None:
        return settings.default_position
    return Coordinates(latitude=args.lat, longitude=args.lng)


async def render_workouts(
    output: str,
    api: WorkoutApiClient,
    position: Coordinates,
    zoom: int,
) -> List[str]:
    """
    Load every workout, render the map to ``output`` and return the list
    row titles, newest first.

    Raises:
        RuntimeError: If the map could not be centered or workouts failed to load
    """
    notifier = LoggingNotifier()
    widget = FoliumMapWidget(position, zoom=zoom)
    sync = PresentationSync(WorkoutStore(api, notifier), api, widget, notifier, zoom=zoom)

    if not await sync.bootstrap(FixedGeolocation(position)) or notifier.messages:
        raise RuntimeError("; ".join(notifier.messages) or "Map could not be loaded")

    widget.save(output)
    return [row.title for row in sync.rows]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_client_settings()

    try:
        position = _position(args, settings)
        api = WorkoutApiClient(
            args.api_url or settings.api_url, timeout=settings.timeout_seconds
        )
        titles = asyncio.run(
            render_workouts(args.output, api, position, settings.map_zoom)
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for title in titles:
        print(title)
    print(f"Map written to {args.output}")
    return 0
