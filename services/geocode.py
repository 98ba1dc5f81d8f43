# services/geocode.py
import logging
import os
from typing import Optional

from models import Location
from .deadline import Deadline, DEFAULT_TIMEOUT
from .errors import InvalidInput, NotFound, DataUnavailable
from .transport import Transport, default_transport, get_json

logger = logging.getLogger(__name__)

GEOCODING_URL = os.environ.get("GEOCODING_URL", "https://geocoding-api.open-meteo.com/v1/search")

def geocode_place(name: str, transport: Optional[Transport] = None,
                  deadline: Optional[Deadline] = None,
                  timeout: float = DEFAULT_TIMEOUT) -> Location:
    """
    Geocode a place name to lat/lon using Open-Meteo Geocoding API.
    Only the top match is used. Runs inside `deadline` when given,
    otherwise under its own budget of `timeout` seconds.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidInput("City name is required")

    if deadline is None:
        with Deadline(timeout) as own:
            return geocode_place(name, transport=transport, deadline=own)

    transport = transport or default_transport()
    params = {"name": name.strip(), "count": 1}
    data = get_json(transport, deadline, GEOCODING_URL, params, "Geocoding API")

    results = data.get("results") if isinstance(data, dict) else None
    if not results:
        logger.info("No geocoding match for %r", name)
        raise NotFound("City not found")
    if not isinstance(results, list) or not isinstance(results[0], dict):
        raise DataUnavailable("Invalid response from Geocoding API")

    top = results[0]
    try:
        lat, lon = top["latitude"], top["longitude"]
    except KeyError:
        raise DataUnavailable("Incomplete geocoding result") from None
    return Location(name=top.get("name") or name.strip(), latitude=lat, longitude=lon)
