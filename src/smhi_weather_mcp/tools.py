import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp import types
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from smhi_weather_mcp.client import SMHIClient
from smhi_weather_mcp.errors import ToolNotFoundError
from smhi_weather_mcp.models import ObservationPeriodKey, WeatherParameter

logger = logging.getLogger("smhi_weather.tools")

PARAMETER_ID_HELP = (
    "Parameter ID (1=temperature, 3=wind direction, 4=wind speed, 5=precipitation, "
    "6=humidity, 8=snow depth, 9=pressure, 12=visibility)"
)


class ToolArguments(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ForecastArguments(ToolArguments):
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate (-180 to 180)")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate (-90 to 90)")
    category: str = Field("pmp3g", description="Forecast category (default: pmp3g for point forecast)")


class ObservationArguments(ToolArguments):
    station_id: int = Field(..., description="SMHI station ID")
    parameter_id: int = Field(..., description=PARAMETER_ID_HELP)
    period: ObservationPeriodKey = Field("latest-hour", description="Time period to fetch observations for")


class StationArguments(ToolArguments):
    parameter_id: int = Field(..., description="Parameter ID to filter stations by (e.g., 1 for temperature)")


class ParameterArguments(ToolArguments):
    pass


def _tool(name: str, description: str, arguments: type) -> types.Tool:
    return types.Tool(name=name, description=description, inputSchema=arguments.model_json_schema())


TOOLS = (
    _tool(
        "get-weather-forecast",
        "Get weather forecast for a specific location from SMHI. "
        "Returns forecast data for approximately 10 days ahead.",
        ForecastArguments,
    ),
    _tool(
        "get-weather-observations",
        "Get historical weather observations from a SMHI weather station.",
        ObservationArguments,
    ),
    _tool(
        "list-weather-stations",
        "List available SMHI weather stations for a specific parameter.",
        StationArguments,
    ),
    _tool(
        "list-weather-parameters",
        "List all available weather parameters that can be queried from SMHI.",
        ParameterArguments,
    ),
)

COMMON_PARAMETERS = {
    "temperature": WeatherParameter.TEMPERATURE.value,
    "humidity": WeatherParameter.HUMIDITY.value,
    "windSpeed": WeatherParameter.WIND_SPEED.value,
    "windDirection": WeatherParameter.WIND_DIRECTION.value,
    "precipitation": WeatherParameter.PRECIPITATION.value,
    "pressure": WeatherParameter.PRESSURE.value,
    "visibility": WeatherParameter.VISIBILITY.value,
    "snowDepth": WeatherParameter.SNOW_DEPTH.value,
}


def _text_result(text: str, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)], isError=is_error)


class ToolDispatcher:
    """Routes MCP tool calls to the SMHI client"""

    def __init__(self, client: SMHIClient):
        self.client = client
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[Any]]] = {
            "get-weather-forecast": self._get_weather_forecast,
            "get-weather-observations": self._get_weather_observations,
            "list-weather-stations": self._list_weather_stations,
            "list-weather-parameters": self._list_weather_parameters,
        }

    def list_tools(self) -> List[types.Tool]:
        return list(TOOLS)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> types.CallToolResult:
        """
        Invoke a tool by name

        Failures never propagate: they are returned as a result with isError set
        and a single text block reading "Error: <message>".
        """
        logger.info(f"Calling tool {name} with {arguments}")
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise ToolNotFoundError(name)
            payload = await handler(arguments or {})
        except Exception as e:
            logger.error(f"Tool {name} failed: {str(e)}")
            return _text_result(f"Error: {str(e)}", is_error=True)

        return _text_result(json.dumps(payload, indent=2, ensure_ascii=False))

    async def _get_weather_forecast(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        args = ForecastArguments.model_validate(arguments)
        forecast = await self.client.get_forecast(args.longitude, args.latitude, args.category)
        return forecast.to_json_dict()

    async def _get_weather_observations(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        args = ObservationArguments.model_validate(arguments)
        observations = await self.client.get_observations(args.station_id, args.parameter_id, args.period)
        return observations.to_json_dict()

    async def _list_weather_stations(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        args = StationArguments.model_validate(arguments)
        info = await self.client.get_stations(args.parameter_id)

        stations = [
            {
                "id": s.id,
                "name": s.name,
                "latitude": s.latitude,
                "longitude": s.longitude,
                "height": s.height,
                "active": s.active,
            }
            for s in info.station or []
        ]
        return {"parameter": info.title, "totalStations": len(stations), "stations": stations}

    async def _list_weather_parameters(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        ParameterArguments.model_validate(arguments)
        parameters = await self.client.get_parameters()

        param_list = [{"id": p.key, "name": p.title, "description": p.summary} for p in parameters]
        return {
            "totalParameters": len(param_list),
            "commonParameters": dict(COMMON_PARAMETERS),
            "parameters": param_list,
        }
