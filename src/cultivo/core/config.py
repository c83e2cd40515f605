"""
Configuration system with validation and environment awareness.
Based on Pydantic Settings for robust configuration management.

Only runtime settings live here. Phase, variety and wash-window tables are
built by ``cultivo.data.catalog`` and passed to the schedule builder
explicitly.
"""
from datetime import date
from pathlib import Path
import logging
import yaml
from pydantic import Field, model_validator, ConfigDict
from pydantic_settings import BaseSettings
from typing import Optional, Literal, Union

from cultivo.core.exceptions import SeasonRangeError
from cultivo.core.types import ScheduleMode, SeasonWindow


class SeasonSettings(BaseSettings):
    """Season boundaries and default rule variant"""

    start: date = Field(date(2025, 9, 4), description="First day of the season (inclusive)")
    end: date = Field(date(2026, 3, 16), description="Last day a week may start on (inclusive)")
    timezone: str = Field("America/Santiago", description="Display label only, no tz math")
    default_mode: ScheduleMode = Field(ScheduleMode.PRIMARY)

    model_config = ConfigDict(env_prefix="CULTIVO_SEASON_", case_sensitive=False)

    @model_validator(mode="after")
    def validate_order(self):
        """Season must not end before it starts"""
        if self.start > self.end:
            raise SeasonRangeError(
                f"Season start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )
        return self

    def window(self) -> SeasonWindow:
        return SeasonWindow(start=self.start, end=self.end, timezone=self.timezone)


class WeatherConfig(BaseSettings):
    """Open-Meteo forecast source and advisory thresholds"""

    # Cerro Navia, Santiago
    latitude: float = Field(-33.4167, ge=-90, le=90)
    longitude: float = Field(-70.75, ge=-180, le=180)
    timezone: str = Field("America/Santiago")
    forecast_url: str = Field("https://api.open-meteo.com/v1/forecast")
    forecast_days: int = Field(7, gt=0, le=16)
    timeout_seconds: int = Field(30, gt=0)

    # Advisory thresholds
    lookahead_days: int = Field(5, gt=0, description="Forecast days considered for advice")
    rain_probability_pct: float = Field(60.0, ge=0, le=100)
    rain_sum_mm: float = Field(5.0, ge=0)
    strong_wind_kmh: float = Field(40.0, gt=0)
    heat_temp_c: float = Field(30.0)

    model_config = ConfigDict(env_prefix="CULTIVO_WEATHER_", case_sensitive=False)


class NotificationConfig(BaseSettings):
    """Outbound reminder channel"""

    enabled: bool = Field(False)
    phone_number: Optional[str] = Field(None, description="Destination in international format")
    whatsapp_base_url: str = Field("https://wa.me")

    model_config = ConfigDict(env_prefix="CULTIVO_NOTIFY_", case_sensitive=False)


class LoggingConfig(BaseSettings):
    """Logging setup"""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    model_config = ConfigDict(env_prefix="CULTIVO_LOG_", case_sensitive=False)

    def apply(self):
        logging.basicConfig(level=getattr(logging, self.log_level), format=self.log_format)


class CultivoConfig(BaseSettings):
    """Main configuration for the cultivo system"""

    project_name: str = "cultivo"
    environment: Literal["development", "production"] = "development"

    season: SeasonSettings = Field(default_factory=SeasonSettings)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    log: LoggingConfig = Field(default_factory=LoggingConfig)

    # Optional YAML catalog overriding the built-in tables
    catalog_path: Optional[Path] = Field(None)

    model_config = ConfigDict(
        env_prefix="CULTIVO_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_config(self):
        """Cross-field validation"""
        if self.notifications.enabled and not self.notifications.phone_number:
            raise ValueError("notifications.phone_number is required when notifications are enabled")
        return self

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "CultivoConfig":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)

    def to_yaml(self, yaml_path: Union[str, Path]):
        """Save configuration to YAML file"""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False)

    def season_window(self) -> SeasonWindow:
        return self.season.window()


# Global configuration instance
_config: Optional[CultivoConfig] = None


def get_config(config_path: Optional[Path] = None) -> CultivoConfig:
    """Get or create configuration instance (singleton pattern)"""
    global _config

    if _config is None:
        if config_path and config_path.exists():
            _config = CultivoConfig.from_yaml(config_path)
        else:
            # Try to load from environment
            _config = CultivoConfig()

    return _config


def set_config(config: Optional[CultivoConfig]):
    """Set configuration (useful for testing)"""
    global _config
    _config = config
