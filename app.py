# app.py
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Tuple

from flask import Flask, request, jsonify, render_template
from flask_cors import CORS

from config import load_settings, setup_logging
from models import CurrentConditions, Forecast
from services.errors import WeatherError, ErrorKind
from services.weather import get_weather_by_place, get_forecast_by_place

settings = load_settings()
logger = logging.getLogger("app")

app = Flask(__name__)
CORS(app, resources={r"/api/*": {"origins": "*"}})
app.config["WEATHER_TIMEOUT"] = settings["WEATHER_TIMEOUT"]
# None means the shared requests-backed transport; tests swap in a fake
app.config["WEATHER_TRANSPORT"] = None

HTTP_STATUS = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.DATA_UNAVAILABLE: 502,
    ErrorKind.NETWORK: 502,
    ErrorKind.TIMEOUT: 504,
}

def _fetch_options() -> dict:
    return {
        "transport": app.config.get("WEATHER_TRANSPORT"),
        "timeout": app.config.get("WEATHER_TIMEOUT"),
    }

def lookup_both(city: str) -> Tuple[CurrentConditions, Forecast]:
    """
    Run both fetchers concurrently and join. Each one geocodes the city on its
    own, so one page load costs two geocoding calls. A current-weather failure
    is reported ahead of a forecast failure.
    """
    opts = _fetch_options()
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="lookup") as pool:
        current = pool.submit(get_weather_by_place, city, **opts)
        forecast = pool.submit(get_forecast_by_place, city, **opts)
        return current.result(), forecast.result()

@app.errorhandler(WeatherError)
def handle_weather_error(e: WeatherError):
    status = HTTP_STATUS.get(e.kind, 500)
    logger.info("Lookup failed (%s): %s", e.kind.value, e.message)
    return jsonify({"error": e.message, "kind": e.kind.value}), status

@app.route("/", methods=["GET"])
def index():
    """Search form; with ?city= also renders current weather and forecast."""
    city = request.args.get("city")
    if city is None:
        return render_template("index.html", city="")

    try:
        current, forecast = lookup_both(city.strip())
    except WeatherError as e:
        return render_template("index.html", city=city, error=e.message), HTTP_STATUS.get(e.kind, 500)
    return render_template("index.html", city=city, current=current, forecast=forecast)

@app.route("/api/weather", methods=["GET"])
def weather():
    current, forecast = lookup_both(request.args.get("city", ""))
    return jsonify({"current": current.to_dict(), "forecast": forecast.to_dict()})

@app.route("/api/current", methods=["GET"])
def current_weather():
    result = get_weather_by_place(request.args.get("city", ""), **_fetch_options())
    return jsonify(result.to_dict())

@app.route("/api/forecast", methods=["GET"])
def forecast():
    result = get_forecast_by_place(request.args.get("city", ""), **_fetch_options())
    return jsonify(result.to_dict())

@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})

if __name__ == "__main__":
    setup_logging(settings["LOG_LEVEL"])
    logger.info("Starting weather backend on %s:%s", settings["HOST"], settings["PORT"])
    app.run(debug=True, host=settings["HOST"], port=settings["PORT"], use_reloader=False)
