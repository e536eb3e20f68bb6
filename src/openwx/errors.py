from typing import Any, Optional


class OpenWeatherError(Exception):
    """Base class for everything openwx raises"""


class GeodeticCoordsError(OpenWeatherError, ValueError):
    """Coordinates outside the valid latitude/longitude range"""

    def __init__(self, value: float, message: str):
        super().__init__(message)
        self.value = value


class LatitudeOutOfRange(GeodeticCoordsError):
    def __init__(self, value: float):
        super().__init__(value, f"provided latitude of `{value}` is out of the valid range [-90, 90]")


class LongitudeOutOfRange(GeodeticCoordsError):
    def __init__(self, value: float):
        super().__init__(value, f"provided longitude of `{value}` is out of the valid range [-180, 180]")


class InvalidWindDirection(OpenWeatherError, ValueError):
    def __init__(self, value: float):
        super().__init__(f"provided wind direction of `{value}` is out of the valid range [0, 360)")
        self.value = value


class TransportError(OpenWeatherError):
    """The request never produced a successful HTTP response"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(OpenWeatherError):
    """The response body is not JSON at all"""


class ResponseShapeError(OpenWeatherError):
    """
    The response body is valid JSON but does not match the expected structure.

    The parsed JSON is kept on ``raw`` so it can be inspected without
    repeating the request.
    """

    def __init__(self, raw: Any, message: str = "response JSON does not match the current weather schema"):
        super().__init__(message)
        self.raw = raw
