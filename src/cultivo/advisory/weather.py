"""
Short weather advice for the grower, independent of the care schedule.
"""
from typing import List, Optional, Sequence
import logging

from cultivo.core.config import WeatherConfig, get_config
from cultivo.data.contracts import DailyForecast

logger = logging.getLogger(__name__)

RAIN_ADVICE = "Lluvias probables: resguardar macetas y revisar drenaje."
WIND_ADVICE = "Vientos fuertes: asegurar tutores y buscar abrigo contra ráfagas."
HEAT_ADVICE = "Altas temperaturas: regar temprano (06:30–08:00) o al atardecer (19:30–21:00)."
CALM_ADVICE = "Sin riesgos relevantes próximos. Mantener riego regular."


def build_weather_advice(forecast: Sequence[DailyForecast],
                         config: Optional[WeatherConfig] = None) -> List[str]:
    """
    Advice lines for the next few forecast days.

    Rain, wind and heat each add one line; with none of them the result is a
    single all-clear line, so the list is never empty.
    """
    config = config or get_config().weather
    window = list(forecast)[:config.lookahead_days]

    heavy_rain = any(
        d.precipitation_probability_max_pct >= config.rain_probability_pct
        or d.precipitation_sum_mm >= config.rain_sum_mm
        for d in window
    )
    strong_wind = any(d.wind_max_kmh >= config.strong_wind_kmh for d in window)
    heat_wave = any(d.temp_max_c is not None and d.temp_max_c >= config.heat_temp_c for d in window)

    messages = []
    if heavy_rain:
        messages.append(RAIN_ADVICE)
    if strong_wind:
        messages.append(WIND_ADVICE)
    if heat_wave:
        messages.append(HEAT_ADVICE)
    if not messages:
        messages.append(CALM_ADVICE)

    logger.debug(f"Weather advice over {len(window)} days: rain={heavy_rain} "
                 f"wind={strong_wind} heat={heat_wave}")
    return messages
