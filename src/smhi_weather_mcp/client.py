import logging
from typing import Any, Callable, List, Optional, TypeVar

import httpx
from pydantic import TypeAdapter

from smhi_weather_mcp.config import Config, config
from smhi_weather_mcp.errors import SMHIError
from smhi_weather_mcp.models import ForecastResponse, ObservationResponse, ParameterInfo

logger = logging.getLogger("smhi_weather.client")

T = TypeVar("T")

_parameter_list = TypeAdapter(List[ParameterInfo])


def _unwrap_resource(data: Any) -> Any:
    """The parameter catalog is normally wrapped in a 'resource' field"""
    if isinstance(data, dict) and isinstance(data.get("resource"), list):
        return data["resource"]
    return data


class SMHIClient:
    """Client for the SMHI Open Data forecast and observation APIs

    Documentation: https://opendata.smhi.se/apidocs/
    """

    def __init__(
        self,
        forecast_base_url: Optional[str] = None,
        observations_base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.forecast_base_url = (forecast_base_url or config.forecast_base_url).rstrip("/")
        self.observations_base_url = (observations_base_url or config.observations_base_url).rstrip("/")
        self._transport = transport

    @classmethod
    def from_config(cls, settings: Config, transport: Optional[httpx.AsyncBaseTransport] = None) -> "SMHIClient":
        return cls(
            forecast_base_url=settings.forecast_base_url,
            observations_base_url=settings.observations_base_url,
            transport=transport,
        )

    async def get_forecast(
        self, longitude: float, latitude: float, category: str = "pmp3g", version: int = 2
    ) -> ForecastResponse:
        """
        Fetch the weather forecast for a point

        Args:
            longitude: Longitude coordinate (-180 to 180)
            latitude: Latitude coordinate (-90 to 90)
            category: Forecast category, pmp3g is the point forecast
            version: Forecast API version
        """
        url = (
            f"{self.forecast_base_url}/{category}/version/{version}"
            f"/geotype/point/lon/{longitude}/lat/{latitude}/data.json"
        )
        return await self._fetch(url, "forecast", ForecastResponse.model_validate)

    async def get_observations(
        self, station_id: int, parameter_id: int, period: str = "latest-months", format: str = "json"
    ) -> ObservationResponse:
        """
        Fetch observations for one parameter from a station

        Args:
            station_id: SMHI station id
            parameter_id: Parameter id, e.g. 1 for temperature
            period: latest-hour, latest-day, latest-months or corrected-archive
            format: json, csv or xml
        """
        url = (
            f"{self.observations_base_url}/version/1.0/parameter/{parameter_id}"
            f"/station/{station_id}/period/{period}/data.{format}"
        )
        return await self._fetch(url, "observations", ObservationResponse.model_validate)

    async def get_stations(self, parameter_id: int) -> ParameterInfo:
        """Get a parameter's metadata including the stations that measure it"""
        url = f"{self.observations_base_url}/version/1.0/parameter/{parameter_id}.json"
        return await self._fetch(url, "stations", ParameterInfo.model_validate)

    async def get_parameters(self) -> List[ParameterInfo]:
        """Get all available observation parameters"""
        url = f"{self.observations_base_url}/version/1.0/parameter.json"
        return await self._fetch(
            url, "parameters", lambda data: _parameter_list.validate_python(_unwrap_resource(data))
        )

    async def _fetch(self, url: str, resource: str, parse: Callable[[Any], T]) -> T:
        logger.info(f"Fetching {resource} from {url}")
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(url)

            if not response.is_success:
                raise SMHIError(
                    f"Failed to fetch {resource}: {response.reason_phrase}",
                    status_code=response.status_code,
                    endpoint=url,
                )

            return parse(response.json())

        except SMHIError as e:
            logger.error(f"SMHI request failed ({e.status_code}) for {url}: {e.message}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"Network error for {url}: {str(e)}")
            raise SMHIError(f"Network error while fetching {resource}: {str(e)}", endpoint=url) from e
        except Exception as e:
            logger.error(f"Could not decode {resource} from {url}: {str(e)}")
            raise SMHIError(f"Invalid response while fetching {resource}: {str(e)}", endpoint=url) from e
