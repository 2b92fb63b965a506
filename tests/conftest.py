from typing import Callable

import httpx
import pytest

from smhi_weather_mcp.client import SMHIClient

FORECAST_BASE = "https://forecast.test/api/category"
OBSERVATIONS_BASE = "https://metobs.test/api"


@pytest.fixture
def forecast_payload():
    return {
        "approvedTime": "2024-05-01T10:05:21Z",
        "referenceTime": "2024-05-01T10:00:00Z",
        "geometry": {"type": "Point", "coordinates": [[18.068581, 59.329443]]},
        "timeSeries": [
            {
                "validTime": "2024-05-01T11:00:00Z",
                "parameters": [
                    {"name": "t", "levelType": "hl", "level": 2, "unit": "Cel", "values": [12.4]},
                    {"name": "ws", "levelType": "hl", "level": 10, "unit": "m/s", "values": [3]},
                ],
            }
        ],
    }


@pytest.fixture
def observation_payload():
    """Shape of metobs .../period/latest-hour/data.json"""
    return {
        "value": [{"date": 1714561200000, "value": "12.3", "quality": "G"}],
        "updated": 1714561200000,
        "parameter": {"key": "1", "name": "Lufttemperatur", "summary": "momentanvärde, 1 gång/tim", "unit": "degree celsius"},
        "station": {
            "key": "98210",
            "name": "Stockholm-Observatoriekullen A",
            "owner": "SMHI",
            "ownerCategory": "CLIMATE",
            "measuringStations": "CORE",
            "height": 43.133,
        },
        "period": {"key": "latest-hour", "from": 1714557601000, "to": 1714561200000, "summary": "Data från senaste timmen", "sampling": "Ett dygn, 1 gång/tim"},
        "position": [{"from": -694137600000, "to": 1714561200000, "height": 43.133, "latitude": 59.3417, "longitude": 18.0549}],
        "link": [{"rel": "data", "type": "application/json", "href": "https://opendata-download-metobs.smhi.se/api/version/1.0/parameter/1/station/98210/period/latest-hour/data.json"}],
    }


@pytest.fixture
def stations_payload():
    """Shape of metobs .../parameter/1.json"""
    return {
        "key": "1",
        "updated": 1714561200000,
        "title": "Lufttemperatur",
        "summary": "momentanvärde, 1 gång/tim",
        "valueType": "SAMPLING",
        "stationSet": [
            {
                "key": "all",
                "updated": 1714561200000,
                "title": "Alla stationer",
                "summary": "Alla stationer som mäter Lufttemperatur",
                "link": [{"rel": "stationSet", "type": "application/json", "href": "https://opendata-download-metobs.smhi.se/api/version/1.0/parameter/1/station-set/all.json"}],
            }
        ],
        "station": [
            {
                "name": "Stockholm-Observatoriekullen A",
                "owner": "SMHI",
                "ownerCategory": "CLIMATE",
                "measuringStations": "CORE",
                "id": 98210,
                "height": 43.133,
                "latitude": 59.3417,
                "longitude": 18.0549,
                "active": True,
                "from": -694137600000,
                "to": 1714561200000,
                "key": "98210",
                "updated": 1714561200000,
                "title": "Stockholm-Observatoriekullen A",
                "summary": "Latitud: 59.3417 Longitud: 18.0549 Höjd: 43.133",
                "link": [{"rel": "station", "type": "application/json", "href": "https://opendata-download-metobs.smhi.se/api/version/1.0/parameter/1/station/98210.json"}],
            },
            {
                "name": "Arlanda Flygplats",
                "owner": "SMHI",
                "ownerCategory": "CLIMATE",
                "measuringStations": "CORE",
                "id": 97400,
                "height": 30,
                "latitude": 59.6269,
                "longitude": 17.9545,
                "active": False,
                "from": 946684800000,
                "to": 1514764800000,
                "key": "97400",
            },
        ],
    }


@pytest.fixture
def parameters_payload():
    return {
        "key": "metobs",
        "resource": [
            {"key": "1", "title": "Lufttemperatur", "summary": "momentanvärde, 1 gång/tim", "valueType": "SAMPLING"},
            {"key": "4", "title": "Vindhastighet", "summary": "medelvärde 10 min, 1 gång/tim", "valueType": "SAMPLING"},
        ],
    }


@pytest.fixture
def make_client() -> Callable[..., SMHIClient]:
    """Build a client whose requests are answered by the given handler"""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> SMHIClient:
        return SMHIClient(
            forecast_base_url=FORECAST_BASE,
            observations_base_url=OBSERVATIONS_BASE,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def json_client(make_client, recorded_requests):
    """Client that records each request and answers 200 with a fixed JSON body"""

    def _make(payload) -> SMHIClient:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return httpx.Response(200, json=payload)

        return make_client(handler)

    return _make
