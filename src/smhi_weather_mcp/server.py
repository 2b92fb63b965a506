import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import mcp.server.stdio
from mcp import types
from mcp.server.lowlevel import Server

from smhi_weather_mcp import __version__
from smhi_weather_mcp.client import SMHIClient
from smhi_weather_mcp.config import Config, config
from smhi_weather_mcp.tools import ToolDispatcher

logger = logging.getLogger("smhi_weather.server")

SERVER_NAME = "smhi-weather-server"


def configure_logging(settings: Config) -> None:
    """Log to a file and to stderr, stdout carries the MCP protocol"""
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "smhi_weather.log"

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(),
        ],
    )


def create_server(client: SMHIClient) -> Server:
    """Create the MCP server exposing the SMHI tools backed by the given client"""
    dispatcher = ToolDispatcher(client)
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return dispatcher.list_tools()

    # The dispatcher validates arguments itself so failures keep the "Error: ..." text
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        return await dispatcher.call_tool(name, arguments)

    return server


async def serve(client: SMHIClient) -> None:
    """Run the server over stdio until the client disconnects"""
    server = create_server(client)
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        logger.info("SMHI Weather Forecast MCP Server started")
        logger.info("Server capabilities: tools")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main(settings: Optional[Config] = None) -> None:
    settings = settings or config
    configure_logging(settings)

    try:
        asyncio.run(serve(SMHIClient.from_config(settings)))
    except Exception as e:
        logger.error(f"Failed to start server: {str(e)}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
