"""Trivial CLI to hit the OpenWeather API for the current weather at a position"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from openwx import __version__
from openwx.config import config
from openwx.errors import OpenWeatherError, ResponseShapeError
from openwx.models import Coordinates, CurrentWeather, WeatherUnits
from openwx.weather import open_weather_request

logger = logging.getLogger("openwx.cli")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level.upper(),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    # httpx logs full request URLs, which carry the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openwx",
        description="Get the current weather at a position from OpenWeather",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--lat", type=float, default=33.545, help="Latitude of the query position")
    parser.add_argument("--lon", type=float, default=-117.771, help="Longitude of the query position")
    parser.add_argument(
        "-a",
        "--api-key",
        default=config.api_key,
        help="OpenWeather API key (defaults to OPENWX_API_KEY)",
    )
    parser.add_argument(
        "--units",
        type=WeatherUnits,
        choices=list(WeatherUnits),
        default=config.units,
        help="Units of the returned measurements",
    )
    parser.add_argument("--timeout", type=float, default=config.timeout, help="Request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def format_report(weather: CurrentWeather, units: WeatherUnits) -> str:
    condition = weather.primary_condition
    wind = weather.wind
    lines = [
        f"{weather.name}, {weather.sys.country}: {condition.description}, "
        f"{weather.main.temp} {units.temperature_unit} (feels like {weather.main.feels_like} {units.temperature_unit})",
        f"Sunrise: {weather.sunrise_local().time()}",
        f"Sunset: {weather.sunset_local().time()}",
        f"Wind coming from: {wind.deg.compass_point().label}, "
        f"blowing towards: {wind.deg.blowing_towards().label} at {wind.speed} {units.speed_unit}",
    ]
    return "\n".join(lines)


def print_error(exc: BaseException) -> None:
    print(f"Error: {exc}", file=sys.stderr)
    cause = exc.__cause__
    while cause is not None:
        print(f"  Caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.api_key:
        parser.error("an API key is required, pass -a/--api-key or set OPENWX_API_KEY")

    setup_logging(args.verbose)

    try:
        coords = Coordinates.new_checked(args.lat, args.lon)
        weather = open_weather_request(
            coords,
            args.units,
            args.api_key,
            base_url=config.base_url,
            timeout=args.timeout,
        )
    except ResponseShapeError as e:
        logger.debug(f"Unparseable response: {json.dumps(e.raw)}")
        print_error(e)
        return 1
    except OpenWeatherError as e:
        print_error(e)
        return 1

    print(weather.model_dump_json(indent=2))
    print(format_report(weather, args.units))
    return 0


if __name__ == "__main__":
    sys.exit(main())
