"""OpenWeather current weather client."""

__version__ = "0.1.0"

from openwx.errors import (  # noqa: E402
    InvalidWindDirection,
    LatitudeOutOfRange,
    LongitudeOutOfRange,
    MalformedResponseError,
    OpenWeatherError,
    ResponseShapeError,
    TransportError,
)
from openwx.models import CompassPoint, Coordinates, CurrentWeather, WeatherUnits, WindDirection  # noqa: E402
from openwx.weather import OpenWeatherClient, open_weather_request, parse_current_weather  # noqa: E402
