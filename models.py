from dataclasses import dataclass, asdict
from typing import Tuple, Dict, Any

@dataclass(frozen=True)
class Location:
    name: str
    latitude: float
    longitude: float

@dataclass(frozen=True)
class CurrentConditions:
    city: str
    temperature_c: float
    description: str                      # never empty; "Unknown" for unmapped codes

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True)
class ForecastDay:
    date: str                             # ISO-8601 calendar date as sent upstream
    min_temp_c: float
    max_temp_c: float
    description: str

@dataclass(frozen=True)
class Forecast:
    city: str
    days: Tuple[ForecastDay, ...]         # chronological, at most 5

    def to_dict(self) -> Dict[str, Any]:
        return {"city": self.city, "days": [asdict(d) for d in self.days]}
