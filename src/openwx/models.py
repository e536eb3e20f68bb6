from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, PlainValidator, field_validator

from openwx.errors import InvalidWindDirection, LatitudeOutOfRange, LongitudeOutOfRange

# Width of one sector of the 16 point compass rose, in degrees
SECTOR_WIDTH = 22.5


class WeatherUnits(str, Enum):
    """Units for OpenWeather responses, ``STANDARD`` is what the API uses when none are requested"""

    STANDARD = "standard"
    IMPERIAL = "imperial"
    METRIC = "metric"

    def __str__(self) -> str:
        return self.value

    @property
    def temperature_unit(self) -> str:
        return {"standard": "K", "imperial": "°F", "metric": "°C"}[self.value]

    @property
    def speed_unit(self) -> str:
        return "mph" if self is WeatherUnits.IMPERIAL else "m/s"


class CompassPoint(str, Enum):
    """The 16 point compass rose, clockwise from North"""

    NORTH = "N"
    NORTH_NORTHEAST = "NNE"
    NORTHEAST = "NE"
    EAST_NORTHEAST = "ENE"
    EAST = "E"
    EAST_SOUTHEAST = "ESE"
    SOUTHEAST = "SE"
    SOUTH_SOUTHEAST = "SSE"
    SOUTH = "S"
    SOUTH_SOUTHWEST = "SSW"
    SOUTHWEST = "SW"
    WEST_SOUTHWEST = "WSW"
    WEST = "W"
    WEST_NORTHWEST = "WNW"
    NORTHWEST = "NW"
    NORTH_NORTHWEST = "NNW"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Long name, e.g. ``South-Southwest``"""
        return "-".join(part.capitalize() for part in self.name.split("_"))


def _compass_sector(degrees: float) -> CompassPoint:
    points = list(CompassPoint)
    for index, point in enumerate(points[:-1]):
        centre = index * SECTOR_WIDTH
        if centre - SECTOR_WIDTH / 2 <= degrees < centre + SECTOR_WIDTH / 2:
            return point
    # Everything from 326.25 upwards, the top of the North sector included, so North
    # spans 11.25 degrees, NNW spans 33.75 and every other point 22.5
    return CompassPoint.NORTH_NORTHWEST


def _check_heading(degrees: float) -> float:
    if not 0.0 <= degrees < 360.0:
        raise InvalidWindDirection(degrees)
    return degrees


class OWModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Coordinates(OWModel):
    latitude: float = Field(..., ge=-90, le=90, alias="lat")
    longitude: float = Field(..., ge=-180, le=180, alias="lon")

    @classmethod
    def new_checked(cls, latitude: float, longitude: float) -> "Coordinates":
        """Create coordinates, raising on the first out of range value (latitude is checked first)"""
        if not -90.0 <= latitude <= 90.0:
            raise LatitudeOutOfRange(latitude)
        if not -180.0 <= longitude <= 180.0:
            raise LongitudeOutOfRange(longitude)
        return cls(latitude=latitude, longitude=longitude)


class WindDirection(OWModel):
    """Meteorological wind direction: the heading the wind comes from, degrees in [0, 360)"""

    degrees: float

    @field_validator("degrees")
    @classmethod
    def check_range(cls, value: float) -> float:
        return _check_heading(value)

    @classmethod
    def new_checked(cls, degrees: float) -> "WindDirection":
        return cls(degrees=_check_heading(degrees))

    def compass_point(self) -> CompassPoint:
        """Compass point the wind is coming from"""
        return _compass_sector(self.degrees)

    def blowing_towards(self) -> CompassPoint:
        """Compass point the wind is blowing towards"""
        reflected = self.degrees + 180.0
        if reflected >= 360.0:
            reflected -= 360.0
        return _compass_sector(reflected)


def _utc_instant(value: Any) -> datetime:
    """Seconds since the UNIX epoch to an aware UTC datetime"""
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"invalid timestamp `{value}`, expected whole seconds since the UNIX epoch")
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise ValueError(f"invalid timestamp `{value}`") from e


def _utc_offset(value: Any) -> timezone:
    """Shift in seconds from UTC to a fixed offset timezone"""
    if isinstance(value, timezone):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid timezone shift from UTC `{value}`, expected whole seconds")
    try:
        return timezone(timedelta(seconds=value))
    except (OverflowError, ValueError) as e:
        raise ValueError(f"invalid timezone shift from UTC `{value}`") from e


def _offset_seconds(tz: timezone) -> int:
    return int(tz.utcoffset(None).total_seconds())


UtcTimestamp = Annotated[datetime, BeforeValidator(_utc_instant)]
UtcOffset = Annotated[timezone, PlainValidator(_utc_offset), PlainSerializer(_offset_seconds, return_type=int)]


class WeatherCondition(OWModel):
    # Weather condition id
    id: int
    # Group of weather parameters (Rain, Snow, Clouds etc.)
    group: str = Field(..., alias="main")
    description: str
    icon: str


class MainReadings(OWModel):
    """Temperatures are Kelvin, Celsius or Fahrenheit depending on the requested units. Pressures are hPa."""

    temp: float
    feels_like: float
    pressure: float
    humidity: float
    temp_min: float
    temp_max: float
    sea_level: float
    ground_level: float = Field(..., alias="grnd_level")


class WindReading(OWModel):
    # meter/sec, or miles/hour for imperial units
    speed: float
    deg: WindDirection
    # Not documented as optional but some responses leave it out
    gust: Optional[float] = None

    @field_validator("deg", mode="before")
    @classmethod
    def parse_heading(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return WindDirection.new_checked(float(value))
        return value


class Clouds(OWModel):
    # Cloudiness, %
    all: float


class Precipitation(OWModel):
    """Precipitation over the last hour, always mm"""

    one_hour: float = Field(..., alias="1h")


class SysInfo(OWModel):
    # Country code (GB, JP etc.)
    country: str
    sunrise: UtcTimestamp
    sunset: UtcTimestamp


class CurrentWeather(OWModel):
    """
    Response of the OpenWeather current weather API, see https://openweathermap.org/current

    Keys the API sends that are not modelled here (``base``, ``cod``, ``sys.type``...) are ignored.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    coord: Coordinates
    weather: List[WeatherCondition] = Field(..., min_length=1)
    main: MainReadings
    # Visibility in meters, capped at 10 km
    visibility: float
    wind: WindReading
    clouds: Clouds
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None
    # Time of data calculation
    dt: UtcTimestamp
    sys: SysInfo
    timezone: UtcOffset
    # City id and name
    id: int
    name: str

    @property
    def primary_condition(self) -> WeatherCondition:
        return self.weather[0]

    @property
    def utc_offset_seconds(self) -> int:
        return _offset_seconds(self.timezone)

    def sunrise_local(self) -> datetime:
        """Sunrise in the local time of the queried position"""
        return self.sys.sunrise.astimezone(self.timezone)

    def sunset_local(self) -> datetime:
        """Sunset in the local time of the queried position"""
        return self.sys.sunset.astimezone(self.timezone)
