"""
cultivo data sources.

Usage:
------
>>> from cultivo.data.sources import OpenMeteoForecastSource
>>> snapshot = OpenMeteoForecastSource().fetch()
>>> [d.precipitation_probability_max_pct for d in snapshot.daily]
"""
from cultivo.data.sources.base import DataSource, ForecastRequest
from cultivo.data.sources.weather import OpenMeteoForecastSource

__all__ = [
    "DataSource",
    "ForecastRequest",
    "OpenMeteoForecastSource",
]
