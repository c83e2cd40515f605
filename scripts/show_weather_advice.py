#!/usr/bin/env python
"""
Fetch the Open-Meteo forecast for the garden and print the advice lines.

Run from the project root with:
    python scripts/show_weather_advice.py
"""
import logging

from dotenv import load_dotenv

from cultivo.advisory import build_weather_advice
from cultivo.core.config import get_config
from cultivo.core.exceptions import DataSourceError
from cultivo.data.sources import OpenMeteoForecastSource

logger = logging.getLogger(__name__)


def main():
    load_dotenv()
    config = get_config()
    config.log.apply()

    try:
        snapshot = OpenMeteoForecastSource(config.weather).fetch()
    except DataSourceError as e:
        logger.error(f"No se pudo obtener clima: {e}")
        raise SystemExit(1)

    if snapshot.current is not None:
        print(f"Ahora: {snapshot.current.temperature_c} °C, "
              f"viento {snapshot.current.wind_speed_kmh} km/h")

    print(f"{'Fecha':<12} {'Máx':>6} {'Mín':>6} {'Lluvia':>8} {'Prob':>6} {'Viento':>8}")
    print("-" * 50)
    for day in snapshot.daily:
        print(f"{day.date.isoformat():<12} {day.temp_max_c or 0:>6.1f} {day.temp_min_c or 0:>6.1f} "
              f"{day.precipitation_sum_mm:>8.1f} {day.precipitation_probability_max_pct:>6.0f} "
              f"{day.wind_max_kmh:>8.1f}")

    print()
    for line in build_weather_advice(snapshot.daily, config.weather):
        print(f"- {line}")


if __name__ == "__main__":
    main()
