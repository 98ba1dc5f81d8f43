#!/usr/bin/env python3
import os, sys
if __package__ is None or __package__ == "":
    sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import argparse
import json
import logging
from typing import Optional, List

from config import load_settings, setup_logging
from models import CurrentConditions, Forecast
from services.errors import WeatherError, ErrorKind
from services.weather import get_weather_by_place, get_forecast_by_place

logger = logging.getLogger("cli")

# 1 doubles as the "no city given" code; argparse itself uses 2 for bad flags
EXIT_CODES = {
    ErrorKind.INVALID_INPUT: 1,
    ErrorKind.NOT_FOUND: 3,
    ErrorKind.UPSTREAM: 4,
    ErrorKind.DATA_UNAVAILABLE: 5,
    ErrorKind.TIMEOUT: 6,
    ErrorKind.NETWORK: 7,
}

def format_current(data: CurrentConditions) -> str:
    return (
        f"\nCurrent Weather in {data.city}:\n\n"
        f"Temperature: {data.temperature_c}°C\n"
        f"Description: {data.description}"
    )

def format_forecast(data: Forecast) -> str:
    lines = [f"\n5-Day Forecast for {data.city}:\n"]
    for day in data.days:
        lines.append(f"{day.date}: {day.min_temp_c}°C - {day.max_temp_c}°C, {day.description}")
    return "\n".join(lines)

def main(argv: Optional[List[str]] = None) -> int:
    cfg = load_settings()

    parser = argparse.ArgumentParser(description="Current weather and 5-day forecast by city name (Open-Meteo)")
    parser.add_argument("city", nargs="*", help="City name, e.g. 'New York'")
    parser.add_argument("--forecast", action="store_true", help="Show the 5-day forecast instead of current weather")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--timeout", type=float, default=cfg["WEATHER_TIMEOUT"],
                        help="Budget in seconds for all requests of one lookup")
    parser.add_argument("--log-level", default=cfg["LOG_LEVEL"], help="DEBUG, INFO, WARNING, ...")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    city = " ".join(args.city).strip()
    if not city:
        print("Please provide a city name.", file=sys.stderr)
        return 1

    try:
        if args.forecast:
            result = get_forecast_by_place(city, timeout=args.timeout)
        else:
            result = get_weather_by_place(city, timeout=args.timeout)
    except WeatherError as e:
        what = "forecast" if args.forecast else "current weather"
        logger.debug("Lookup failed with kind=%s", e.kind.value)
        print(f"Error fetching {what}: {e.message}", file=sys.stderr)
        return EXIT_CODES.get(e.kind, 1)

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    elif args.forecast:
        print(format_forecast(result))
    else:
        print(format_current(result))
    return 0

if __name__ == "__main__":
    sys.exit(main())
