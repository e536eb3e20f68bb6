from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from openwx.models import WeatherUnits

CURRENT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_TIMEOUT = 10.0


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="OPENWX_", extra="ignore")
    api_key: Optional[str] = None
    base_url: str = CURRENT_WEATHER_URL
    timeout: float = DEFAULT_TIMEOUT
    units: WeatherUnits = WeatherUnits.IMPERIAL
    log_level: str = "WARNING"
    log_file: Optional[Path] = None


config = Config()
