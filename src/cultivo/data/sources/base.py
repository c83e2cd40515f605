"""
Abstract base class for external data sources.
Provides the shared request, caching and logging plumbing.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Dict, Any
from pathlib import Path
import hashlib
import json
from dataclasses import dataclass
import logging


@dataclass
class ForecastRequest:
    """Request for a location forecast"""
    latitude: float
    longitude: float
    timezone: str = "auto"
    forecast_days: int = 7

    def cache_key(self) -> str:
        """Generate cache key for this request"""
        data = {
            'latitude': round(self.latitude, 4),
            'longitude': round(self.longitude, 4),
            'timezone': self.timezone,
            'forecast_days': self.forecast_days,
        }
        json_str = json.dumps(data, sort_keys=True)
        return hashlib.md5(json_str.encode()).hexdigest()


class DataSource(ABC):
    """
    Abstract base class for all data sources.
    Implements common patterns: caching, request validation, logging.
    """

    def __init__(self, name: str, cache_dir: Optional[Path] = None):
        self.name = name
        self.cache_dir = cache_dir
        self.cache_enabled = cache_dir is not None
        self.logger = logging.getLogger(f"cultivo.data.{name}")

        if self.cache_enabled:
            self.cache_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def fetch(self, request: ForecastRequest) -> Any:
        """
        Fetch data for given request.
        Must be implemented by concrete sources.
        """
        pass

    def _get_cache_path(self, request: ForecastRequest) -> Path:
        return self.cache_dir / f"{request.cache_key()}.json"

    def _load_from_cache(self, request: ForecastRequest) -> Optional[Dict[str, Any]]:
        """Load data from cache if available and fresh"""
        if not self.cache_enabled:
            return None

        cache_path = self._get_cache_path(request)
        if not cache_path.exists():
            return None

        cache_age_hours = (datetime.now().timestamp() - cache_path.stat().st_mtime) / 3600
        if cache_age_hours > self._get_max_cache_age_hours():
            return None

        try:
            with open(cache_path, 'r', encoding='utf-8') as f:
                cached_data = json.load(f)
            self.logger.debug(f"Cache hit for {request.cache_key()}")
            return cached_data
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning(f"Failed to load cache: {e}")
            return None

    def _save_to_cache(self, request: ForecastRequest, data: Dict[str, Any]):
        if not self.cache_enabled:
            return

        cache_path = self._get_cache_path(request)
        try:
            with open(cache_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, default=str)
            self.logger.debug(f"Cached data for {request.cache_key()}")
        except OSError as e:
            self.logger.warning(f"Failed to cache data: {e}")

    def _get_max_cache_age_hours(self) -> float:
        """Override in subclasses based on data volatility"""
        return 1.0

    def validate_request(self, request: ForecastRequest) -> List[str]:
        """Validate fetch request. Returns list of errors or empty list if valid."""
        errors = []

        if not -90 <= request.latitude <= 90:
            errors.append("latitude must be within [-90, 90]")
        if not -180 <= request.longitude <= 180:
            errors.append("longitude must be within [-180, 180]")
        if request.forecast_days < 1 or request.forecast_days > 16:
            errors.append("forecast_days must be within [1, 16]")

        return errors
