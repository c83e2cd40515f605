"""
Open-Meteo forecast source (no API key required).
"""
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from pathlib import Path
import requests

from cultivo.core.config import WeatherConfig, get_config
from cultivo.core.exceptions import DataSourceError
from cultivo.data.contracts import CurrentWeather, DailyForecast, WeatherSnapshot
from cultivo.data.sources.base import DataSource, ForecastRequest


class OpenMeteoForecastSource(DataSource):
    """
    Current conditions and daily forecast from Open-Meteo.
    """

    CURRENT_VARIABLES = [
        "temperature_2m",
        "wind_speed_10m",
        "wind_gusts_10m",
        "precipitation",
        "relative_humidity_2m",
        "weather_code",
    ]

    DAILY_VARIABLES = [
        "temperature_2m_max",
        "temperature_2m_min",
        "precipitation_sum",
        "precipitation_probability_max",
        "wind_speed_10m_max",
        "uv_index_max",
    ]

    # Open-Meteo name -> CurrentWeather field
    CURRENT_MAPPING = {
        "temperature_2m": "temperature_c",
        "wind_speed_10m": "wind_speed_kmh",
        "wind_gusts_10m": "wind_gusts_kmh",
        "precipitation": "precipitation_mm",
        "relative_humidity_2m": "relative_humidity_pct",
        "weather_code": "weather_code",
    }

    # Open-Meteo name -> (DailyForecast field, value when missing)
    DAILY_MAPPING = {
        "temperature_2m_max": ("temp_max_c", None),
        "temperature_2m_min": ("temp_min_c", None),
        "precipitation_sum": ("precipitation_sum_mm", 0.0),
        "precipitation_probability_max": ("precipitation_probability_max_pct", 0.0),
        "wind_speed_10m_max": ("wind_max_kmh", 0.0),
        "uv_index_max": ("uv_index_max", 0.0),
    }

    def __init__(self, config: Optional[WeatherConfig] = None,
                 cache_dir: Optional[Path] = None,
                 session: Optional[requests.Session] = None):
        super().__init__("open_meteo", cache_dir)
        self.config = config or get_config().weather
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'cultivo-calendar/1.0'
        })

    def default_request(self) -> ForecastRequest:
        return ForecastRequest(
            latitude=self.config.latitude,
            longitude=self.config.longitude,
            timezone=self.config.timezone,
            forecast_days=self.config.forecast_days,
        )

    def fetch(self, request: Optional[ForecastRequest] = None) -> WeatherSnapshot:
        """Fetch and parse the forecast; raises DataSourceError on any failure"""
        request = request or self.default_request()

        errors = self.validate_request(request)
        if errors:
            raise DataSourceError(f"Invalid forecast request: {'; '.join(errors)}")

        data = self._load_from_cache(request)
        if data is None:
            data = self._fetch_raw(request)
            self._save_to_cache(request, data)

        return self.parse_response(data)

    def _fetch_raw(self, request: ForecastRequest) -> Dict[str, Any]:
        params = {
            "latitude": request.latitude,
            "longitude": request.longitude,
            "current": ",".join(self.CURRENT_VARIABLES),
            "daily": ",".join(self.DAILY_VARIABLES),
            "forecast_days": request.forecast_days,
            "timezone": request.timezone,
        }

        self.logger.info(f"Fetching forecast weather: {params}")

        try:
            response = self.session.get(
                self.config.forecast_url, params=params, timeout=self.config.timeout_seconds
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise DataSourceError(f"Open-Meteo forecast API error: {e}")
        except ValueError as e:
            raise DataSourceError(f"Open-Meteo returned invalid JSON: {e}")

    def parse_response(self, data: Dict[str, Any]) -> WeatherSnapshot:
        """Parse an Open-Meteo payload into a WeatherSnapshot"""
        if not isinstance(data, dict):
            raise DataSourceError("Unexpected Open-Meteo payload")

        current = None
        raw_current = data.get("current")
        if raw_current:
            try:
                current = CurrentWeather(**{
                    our_field: raw_current.get(api_field)
                    for api_field, our_field in self.CURRENT_MAPPING.items()
                })
            except ValueError as e:
                raise DataSourceError(f"Invalid current conditions from Open-Meteo: {e}")

        return WeatherSnapshot(
            current=current,
            daily=self._parse_daily(data.get("daily") or {}),
            fetched_at=datetime.now(),
        )

    def _parse_daily(self, daily_data: Dict[str, Any]) -> List[DailyForecast]:
        dates = daily_data.get("time") or []
        records = []

        for i, date_str in enumerate(dates):
            try:
                record = {"date": date.fromisoformat(date_str)}
                for api_field, (our_field, missing) in self.DAILY_MAPPING.items():
                    values = daily_data.get(api_field) or []
                    value = values[i] if i < len(values) else None
                    record[our_field] = missing if value is None else value
                records.append(DailyForecast(**record))
            except (TypeError, ValueError) as e:
                self.logger.warning(f"Skipping forecast day {date_str!r}: {e}")

        return records
