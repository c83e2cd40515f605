"""Grower-facing advice derived from external data."""
from cultivo.advisory.weather import build_weather_advice

__all__ = ["build_weather_advice"]
