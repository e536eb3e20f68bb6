import json
import logging
from typing import Optional, Union

import httpx
from pydantic import ValidationError

from openwx.config import CURRENT_WEATHER_URL, DEFAULT_TIMEOUT
from openwx.errors import MalformedResponseError, ResponseShapeError, TransportError
from openwx.models import Coordinates, CurrentWeather, WeatherUnits

logger = logging.getLogger("openwx.weather")


def parse_current_weather(payload: Union[str, bytes]) -> CurrentWeather:
    """
    Parse a current weather response body.

    The body is first loaded as untyped JSON so that, when it does not match the
    expected structure, the parsed value can still be handed back on the
    ``ResponseShapeError`` for inspection.
    """
    try:
        raw = json.loads(payload)
    except ValueError as e:
        logger.error(f"Response is not valid JSON: {str(e)}")
        raise MalformedResponseError(f"response is not valid JSON: {str(e)}") from e

    logger.debug(f"Raw response: {raw}")

    try:
        return CurrentWeather.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Response does not match the current weather schema: {e.error_count()} error(s)")
        raise ResponseShapeError(raw) from e


class OpenWeatherClient:
    """Blocking client for the OpenWeather current weather endpoint"""

    def __init__(
        self,
        api_key: str,
        base_url: str = CURRENT_WEATHER_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self) -> "OpenWeatherClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def current_weather(self, coords: Coordinates, units: WeatherUnits = WeatherUnits.STANDARD) -> CurrentWeather:
        """Get the current weather at a position"""
        params = {
            "lat": f"{coords.latitude:f}",
            "lon": f"{coords.longitude:f}",
            "mode": "json",
            "units": units.value,
            "appid": self.api_key,
        }

        logger.info(f"Requesting current weather for ({coords.latitude}, {coords.longitude}) in {units.value} units")
        try:
            response = self.http_client.get(self.base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"OpenWeather returned HTTP {status}")
            cause = httpx.HTTPStatusError(self._redact(str(e)), request=e.request, response=e.response)
            raise TransportError(f"OpenWeather returned HTTP {status}", status_code=status) from cause
        except httpx.RequestError as e:
            message = self._redact(str(e))
            logger.error(f"Request to OpenWeather failed: {message}")
            raise TransportError(f"request to OpenWeather failed: {message}") from type(e)(message, request=e.request)

        return parse_current_weather(response.content)

    def _redact(self, text: str) -> str:
        """Strip the API key out of httpx messages, which quote the full request URL"""
        return text.replace(self.api_key, "***") if self.api_key else text


def open_weather_request(
    coords: Coordinates,
    units: WeatherUnits,
    api_key: str,
    base_url: str = CURRENT_WEATHER_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> CurrentWeather:
    """Request the current weather from OpenWeather with a one-off client"""
    with OpenWeatherClient(api_key, base_url=base_url, timeout=timeout) as client:
        return client.current_weather(coords, units)
