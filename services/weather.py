# services/weather.py
import logging
import os
from typing import Optional

from models import CurrentConditions, Forecast, ForecastDay
from .codes import describe_weather_code
from .deadline import Deadline, DEFAULT_TIMEOUT
from .errors import DataUnavailable
from .geocode import geocode_place
from .transport import Transport, default_transport, get_json

logger = logging.getLogger(__name__)

FORECAST_URL = os.environ.get("FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
FORECAST_DAYS = 5

def get_weather_by_place(name: str, transport: Optional[Transport] = None,
                         timeout: float = DEFAULT_TIMEOUT) -> CurrentConditions:
    """
    Geocode then fetch current weather from Open-Meteo forecast API.
    Both calls share one timeout budget of `timeout` seconds.
    """
    transport = transport or default_transport()
    with Deadline(timeout) as deadline:
        g = geocode_place(name, transport=transport, deadline=deadline)

        params = {
            "latitude": g.latitude,
            "longitude": g.longitude,
            "current_weather": "true",
        }
        data = get_json(transport, deadline, FORECAST_URL, params, "Weather API")

    cur = data.get("current_weather") if isinstance(data, dict) else None
    if not isinstance(cur, dict) or cur.get("temperature") is None:
        raise DataUnavailable("Weather data unavailable")

    return CurrentConditions(
        city=g.name,
        temperature_c=cur["temperature"],
        description=describe_weather_code(cur.get("weathercode")),
    )

def get_forecast_by_place(name: str, transport: Optional[Transport] = None,
                          timeout: float = DEFAULT_TIMEOUT,
                          days: int = FORECAST_DAYS) -> Forecast:
    """
    Geocode then fetch the daily forecast, keeping the first `days` entries.

    The date, min, max and code series are paired by position; upstream
    returns them index-aligned and that is not re-checked here.
    """
    transport = transport or default_transport()
    with Deadline(timeout) as deadline:
        g = geocode_place(name, transport=transport, deadline=deadline)

        params = {
            "latitude": g.latitude,
            "longitude": g.longitude,
            "daily": "temperature_2m_max,temperature_2m_min,weathercode",
            "timezone": "auto",
        }
        data = get_json(transport, deadline, FORECAST_URL, params, "Forecast API")

    daily = data.get("daily") if isinstance(data, dict) else None
    dates = daily.get("time") if isinstance(daily, dict) else None
    if not dates or not isinstance(dates, list):
        raise DataUnavailable("No forecast data available")

    highs = daily.get("temperature_2m_max")
    lows = daily.get("temperature_2m_min")
    codes = daily.get("weathercode")
    if not all(isinstance(series, list) for series in (highs, lows, codes)):
        raise DataUnavailable("Incomplete forecast data")

    logger.debug("Forecast for %s: %d days upstream, keeping %d", g.name, len(dates), days)
    try:
        entries = tuple(
            ForecastDay(
                date=date,
                min_temp_c=lows[i],
                max_temp_c=highs[i],
                description=describe_weather_code(codes[i]),
            )
            for i, date in enumerate(dates[:days])
        )
    except IndexError:
        raise DataUnavailable("Incomplete forecast data") from None
    return Forecast(city=g.name, days=entries)
