import time

import pytest
import requests

from models import CurrentConditions, ForecastDay
from services import weather
from services.errors import (
    InvalidInput, NotFound, UpstreamError, DataUnavailable, RequestTimeout, ErrorKind,
)
from services.weather import get_weather_by_place, get_forecast_by_place
from fakes import FakeResponse, FakeTransport, geo_ok, daily_payload


def test_current_weather_end_to_end():
    transport = FakeTransport(
        geo_ok("New York", 40.7, -74.0),
        FakeResponse({"current_weather": {"temperature": 18.5, "weathercode": 3}}),
    )
    result = get_weather_by_place("New York", transport=transport)

    assert result == CurrentConditions(city="New York", temperature_c=18.5, description="Overcast")
    weather_call = transport.calls[1]
    assert weather_call["url"] == weather.FORECAST_URL
    assert weather_call["params"] == {"latitude": 40.7, "longitude": -74.0, "current_weather": "true"}


def test_current_weather_uses_canonical_name():
    transport = FakeTransport(
        geo_ok("München", 48.14, 11.58),
        FakeResponse({"current_weather": {"temperature": 4.0, "weathercode": 71}}),
    )
    result = get_weather_by_place("munich", transport=transport)
    assert result.city == "München"
    assert result.description == "Slight snow fall"


def test_unmapped_code_reads_unknown():
    transport = FakeTransport(
        geo_ok(),
        FakeResponse({"current_weather": {"temperature": 1.0, "weathercode": 42}}),
    )
    assert get_weather_by_place("New York", transport=transport).description == "Unknown"


@pytest.mark.parametrize("fetch", [get_weather_by_place, get_forecast_by_place])
def test_not_found_skips_second_call(fetch):
    transport = FakeTransport(
        FakeResponse({"results": []}),
        FakeResponse({"current_weather": {"temperature": 18.5, "weathercode": 3}}),
    )
    with pytest.raises(NotFound):
        fetch("Atlantis", transport=transport)
    assert len(transport.calls) == 1


@pytest.mark.parametrize("fetch", [get_weather_by_place, get_forecast_by_place])
def test_invalid_input_propagates(fetch):
    transport = FakeTransport()
    with pytest.raises(InvalidInput) as exc:
        fetch("", transport=transport)
    assert exc.value.kind is ErrorKind.INVALID_INPUT
    assert transport.calls == []


def test_weather_api_429_is_upstream_error():
    transport = FakeTransport(geo_ok(), FakeResponse(status_code=429))
    with pytest.raises(UpstreamError) as exc:
        get_weather_by_place("New York", transport=transport)
    assert "429" in str(exc.value)
    assert str(exc.value) == "Weather API error: 429"


@pytest.mark.parametrize("payload", [{}, {"current_weather": None}, {"current_weather": {"weathercode": 1}}])
def test_missing_current_payload(payload):
    transport = FakeTransport(geo_ok(), FakeResponse(payload))
    with pytest.raises(DataUnavailable) as exc:
        get_weather_by_place("New York", transport=transport)
    assert str(exc.value) == "Weather data unavailable"


def test_undecodable_body_is_data_unavailable():
    transport = FakeTransport(geo_ok(), FakeResponse(ValueError("Expecting value")))
    with pytest.raises(DataUnavailable):
        get_weather_by_place("New York", transport=transport)


def test_hanging_weather_call_times_out(hang):
    transport = FakeTransport(geo_ok(), hang)
    started = time.monotonic()
    with pytest.raises(RequestTimeout) as exc:
        get_weather_by_place("New York", transport=transport, timeout=0.05)
    elapsed = time.monotonic() - started

    assert str(exc.value) == "Request timed out"
    assert exc.value.kind is ErrorKind.TIMEOUT
    assert elapsed < 1.0


def test_hanging_geocode_call_times_out(hang):
    transport = FakeTransport(hang)
    with pytest.raises(RequestTimeout):
        get_forecast_by_place("New York", transport=transport, timeout=0.05)
    assert len(transport.calls) == 1


def test_budget_is_shared_between_calls():
    def slow_geocode():
        time.sleep(0.2)
        return geo_ok()

    transport = FakeTransport(slow_geocode, FakeResponse({"current_weather": {"temperature": 1.0}}))
    get_weather_by_place("New York", transport=transport, timeout=2.0)

    first, second = transport.calls
    assert second["timeout"] < first["timeout"]
    assert second["timeout"] <= 1.85


def test_transport_timeout_is_normalized():
    transport = FakeTransport(geo_ok(), requests.exceptions.ReadTimeout("read timed out"))
    with pytest.raises(RequestTimeout):
        get_weather_by_place("New York", transport=transport)


def test_forecast_keeps_first_five_days():
    transport = FakeTransport(geo_ok(), FakeResponse(daily_payload(7)))
    result = get_forecast_by_place("New York", transport=transport)

    assert result.city == "New York"
    assert len(result.days) == 5
    assert [d.date for d in result.days] == [
        "2026-10-19", "2026-10-20", "2026-10-21", "2026-10-22", "2026-10-23",
    ]
    assert result.days[0] == ForecastDay(
        date="2026-10-19", min_temp_c=10.0, max_temp_c=20.0, description="Clear sky",
    )
    assert result.days[3].description == "Overcast"
    assert result.days[4].description == "Unknown"


def test_forecast_request_params():
    transport = FakeTransport(geo_ok(), FakeResponse(daily_payload(5)))
    get_forecast_by_place("New York", transport=transport)
    assert transport.calls[1]["params"] == {
        "latitude": 40.7,
        "longitude": -74.0,
        "daily": "temperature_2m_max,temperature_2m_min,weathercode",
        "timezone": "auto",
    }


def test_short_forecast_is_returned_whole():
    transport = FakeTransport(geo_ok(), FakeResponse(daily_payload(3)))
    assert len(get_forecast_by_place("New York", transport=transport).days) == 3


@pytest.mark.parametrize("payload", [{}, {"daily": {}}, {"daily": {"time": []}}])
def test_empty_forecast(payload):
    transport = FakeTransport(geo_ok(), FakeResponse(payload))
    with pytest.raises(DataUnavailable) as exc:
        get_forecast_by_place("New York", transport=transport)
    assert str(exc.value) == "No forecast data available"


def test_forecast_missing_series():
    payload = daily_payload(5)
    del payload["daily"]["weathercode"]
    transport = FakeTransport(geo_ok(), FakeResponse(payload))
    with pytest.raises(DataUnavailable):
        get_forecast_by_place("New York", transport=transport)


def test_forecast_api_error_names_the_api():
    transport = FakeTransport(geo_ok(), FakeResponse(status_code=503))
    with pytest.raises(UpstreamError) as exc:
        get_forecast_by_place("New York", transport=transport)
    assert exc.value.status == 503
    assert str(exc.value) == "Forecast API error: 503"


@pytest.mark.parametrize("current", [[1], "sunny", 18.5])
def test_wrong_shaped_current_payload(current):
    transport = FakeTransport(geo_ok(), FakeResponse({"current_weather": current}))
    with pytest.raises(DataUnavailable) as exc:
        get_weather_by_place("New York", transport=transport)
    assert str(exc.value) == "Weather data unavailable"


@pytest.mark.parametrize("payload", [
    {"daily": ["2026-10-19"]},
    {"daily": "none"},
    {"daily": {"time": "2026-10-19"}},
    [],
])
def test_wrong_shaped_daily_payload(payload):
    transport = FakeTransport(geo_ok(), FakeResponse(payload))
    with pytest.raises(DataUnavailable) as exc:
        get_forecast_by_place("New York", transport=transport)
    assert str(exc.value) == "No forecast data available"


def test_forecast_series_of_wrong_type():
    payload = daily_payload(5)
    payload["daily"]["temperature_2m_min"] = {"0": 10.0}
    transport = FakeTransport(geo_ok(), FakeResponse(payload))
    with pytest.raises(DataUnavailable) as exc:
        get_forecast_by_place("New York", transport=transport)
    assert str(exc.value) == "Incomplete forecast data"


def test_days_past_the_cut_are_not_read():
    payload = daily_payload(7)
    for key in ("temperature_2m_max", "temperature_2m_min", "weathercode"):
        payload["daily"][key] = payload["daily"][key][:5]
    transport = FakeTransport(geo_ok(), FakeResponse(payload))

    result = get_forecast_by_place("New York", transport=transport)
    assert [d.date for d in result.days][-1] == "2026-10-23"
    assert len(result.days) == 5


def test_short_series_inside_the_cut():
    payload = daily_payload(5)
    payload["daily"]["weathercode"] = payload["daily"]["weathercode"][:3]
    transport = FakeTransport(geo_ok(), FakeResponse(payload))
    with pytest.raises(DataUnavailable):
        get_forecast_by_place("New York", transport=transport)
