from enum import IntEnum
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Keeps integers as integers when round-tripping upstream JSON
Number = Union[int, float]

ObservationPeriodKey = Literal["latest-hour", "latest-day", "latest-months", "corrected-archive"]


class WeatherParameter(IntEnum):
    """Commonly used SMHI observation parameter ids"""

    TEMPERATURE = 1
    WIND_DIRECTION = 3
    WIND_SPEED = 4
    PRECIPITATION = 5
    HUMIDITY = 6
    SNOW_DEPTH = 8
    PRESSURE = 9
    VISIBILITY = 12


class SMHIModel(BaseModel):
    """Base for records decoded from SMHI JSON"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

# Fields are optional unless a tool projects them; SMHI payloads vary per product and period.

# Forecast API

class ForecastGeometry(SMHIModel):
    """Forecast point, coordinates as sent by SMHI"""
    type: Optional[str] = None
    coordinates: Optional[List[Any]] = None


class ForecastParameter(SMHIModel):
    name: Optional[str] = None
    level_type: Optional[str] = None
    level: Optional[Number] = None
    unit: Optional[str] = None
    values: Optional[List[Any]] = None


class ForecastTimeSeries(SMHIModel):
    valid_time: Optional[str] = None
    parameters: Optional[List[ForecastParameter]] = None


class ForecastResponse(SMHIModel):
    """Point forecast for roughly ten days ahead"""
    approved_time: Optional[str] = None
    reference_time: Optional[str] = None
    geometry: Optional[ForecastGeometry] = None
    time_series: Optional[List[ForecastTimeSeries]] = None


# Observations API

class Link(SMHIModel):
    rel: Optional[str] = None
    type: Optional[str] = None
    href: Optional[str] = None


class StationSet(SMHIModel):
    key: Union[int, str, None] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    link: Optional[List[Link]] = None


class Station(SMHIModel):
    """Station measuring a parameter, as listed in the parameter metadata"""
    id: int
    name: str
    height: Number
    latitude: float
    longitude: float
    active: bool
    owner: Optional[str] = None
    from_: Optional[int] = Field(None, alias="from")
    to: Optional[int] = None
    key: Optional[str] = None
    updated: Optional[int] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    link: Optional[List[Link]] = None


class ObservationStation(SMHIModel):
    """Station block of an observation response, the position is sent separately"""
    key: Optional[str] = None
    name: Optional[str] = None
    owner: Optional[str] = None
    owner_category: Optional[str] = None
    measuring_stations: Optional[str] = None
    height: Optional[Number] = None


class StationPosition(SMHIModel):
    from_: Optional[int] = Field(None, alias="from")
    to: Optional[int] = None
    height: Optional[Number] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class ObservationParameter(SMHIModel):
    key: Optional[str] = None
    name: Optional[str] = None
    summary: Optional[str] = None
    unit: Optional[str] = None


class ObservationPeriod(SMHIModel):
    key: Optional[str] = None
    from_: Optional[int] = Field(None, alias="from")
    to: Optional[int] = None
    summary: Optional[str] = None
    sampling: Optional[str] = None


class ObservationValue(SMHIModel):
    """Single measurement, quality is one of G (green), Y (yellow), R (red)"""
    date: Optional[int] = None
    value: Union[Number, str, None] = None
    quality: Optional[str] = None


class ObservationResponse(SMHIModel):
    """Observations for one parameter at one station

    SMHI sends the readings under 'value'; 'data' is accepted as well.
    """
    updated: Optional[int] = None
    station: Optional[ObservationStation] = None
    parameter: Optional[ObservationParameter] = None
    period: Optional[ObservationPeriod] = None
    position: Optional[List[StationPosition]] = None
    value: Optional[List[ObservationValue]] = None
    data: Optional[List[ObservationValue]] = None
    link: Optional[List[Link]] = None

    @property
    def readings(self) -> List[ObservationValue]:
        return self.value or self.data or []


class ParameterInfo(SMHIModel):
    """Observation parameter metadata, optionally with its stations"""
    key: Union[int, str, None] = None
    title: str
    summary: Optional[str] = None
    value_type: Optional[str] = None
    station_set: Union[List[StationSet], StationSet, None] = None
    station: Optional[List[Station]] = None
