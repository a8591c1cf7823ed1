# server.py
import os
import asyncio
import argparse
import sys
from typing import Dict, Any
from dotenv import load_dotenv
from fastmcp import FastMCP
from mcp_youth.api_client import YouthActivityApiClient
from mcp_youth.documents import (
    YOUTH_GUIDE,
    YOUTH_INFO,
    YOUTH_SIDO_CODES,
    facility_guide_prompt,
    find_activities_prompt,
    read_document,
)
from mcp_youth.errors import StartupConfigError, ValidationError, YouthApiError
from mcp_youth.formatting import (
    format_activities,
    format_error,
    format_facility_groups,
    format_sido_list,
    format_sigungu_list,
)
from mcp_youth.middleware import ArgumentValidationMiddleware
import logging
from starlette.requests import Request
from starlette.responses import JSONResponse


# Configure basic logging; stdout carries protocol traffic, so log to stderr
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Youth Activity API MCP Server"

HTTP_TRANSPORTS = ("streamable-http", "sse")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_settings() -> Dict[str, Any]:
    """
    Read client configuration from environment variables.

    A .env file is consulted only when YOUTH_API_SERVICE_KEY is not already set.

    Raises:
        StartupConfigError: if the service key is missing or the timeout is invalid.
    """
    if not os.environ.get("YOUTH_API_SERVICE_KEY"):
        load_dotenv()

    service_key = os.environ.get("YOUTH_API_SERVICE_KEY")
    if not service_key:
        raise StartupConfigError(
            "YOUTH_API_SERVICE_KEY environment variable is not set. "
            "Get a service key from https://www.data.go.kr"
        )

    raw_timeout = os.environ.get(
        "MCP_YOUTH_TIMEOUT", str(YouthActivityApiClient.DEFAULT_TIMEOUT)
    )
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise StartupConfigError(
            f"MCP_YOUTH_TIMEOUT must be a number of seconds, got '{raw_timeout}'"
        )
    if timeout <= 0:
        raise StartupConfigError(
            f"MCP_YOUTH_TIMEOUT must be greater than 0, got '{raw_timeout}'"
        )

    return {"service_key": service_key, "timeout": timeout}


async def health_check(request: Request) -> JSONResponse:
    """
    Health check endpoint for HTTP transports.

    Returns:
        JSONResponse: Health status with server information
    """
    return JSONResponse(
        {
            "status": "healthy",
            "service": SERVICE_NAME,
            "transport": os.environ.get("MCP_TRANSPORT", "stdio"),
            "timestamp": asyncio.get_event_loop().time(),
        }
    )


def create_server(api_client: YouthActivityApiClient) -> FastMCP:
    """Build the MCP server around one API client."""
    mcp = FastMCP(
        name="youth-activity-api",
        instructions=(
            "여성가족부 청소년활동정보 API로 시도/시군구, 청소년 활동 프로그램, "
            "청소년 시설 그룹을 조회합니다."
        ),
    )
    mcp.add_middleware(ArgumentValidationMiddleware())

    @mcp.tool
    async def get_sido_list(page_no: int = 1, num_of_rows: int = 100) -> str:
        """
        Get the list of sido (province-level regions) known to the youth activity API.

        Use the returned names as the `sido` argument of the other tools.

        Args:
            page_no (int, optional): Page number (default: 1, min: 1)
            num_of_rows (int, optional): Items per page (default: 100, min: 1)

        Example:
            get_sido_list(1, 100)
        """
        try:
            result = await api_client.get_sido_list(
                page_no=page_no, num_of_rows=num_of_rows
            )
        except (ValidationError, YouthApiError) as e:
            logger.warning(f"get_sido_list failed: {e}")
            return format_error(e)
        return format_sido_list(result)

    @mcp.tool
    async def get_sigungu_list(
        sido: str, page_no: int = 1, num_of_rows: int = 100
    ) -> str:
        """
        Get the sigungu (district-level regions) of one sido.

        Args:
            sido (str): Sido name, e.g. "서울" or "부산광역시"
            page_no (int, optional): Page number (default: 1, min: 1)
            num_of_rows (int, optional): Items per page (default: 100, min: 1)

        Example:
            get_sigungu_list("서울")
        """
        try:
            result = await api_client.get_sigungu_list(
                sido=sido, page_no=page_no, num_of_rows=num_of_rows
            )
        except (ValidationError, YouthApiError) as e:
            logger.warning(f"get_sigungu_list failed: {e}")
            return format_error(e)
        return format_sigungu_list(result, sido)

    @mcp.tool
    async def search_youth_activities(
        program_name: str | None = None,
        organization: str | None = None,
        sido: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        page_no: int = 1,
        num_of_rows: int = 10,
    ) -> str:
        """
        Search youth activity programs.

        All filters are optional; without any filter the newest programs are listed.

        Args:
            program_name (str, optional): Program name to search for
            organization (str, optional): Organizing institution name
            sido (str, optional): Sido name, e.g. "서울"
            start_date (str, optional): Activity period start in YYYYMMDD format
            end_date (str, optional): Activity period end in YYYYMMDD format
            page_no (int, optional): Page number (default: 1, min: 1)
            num_of_rows (int, optional): Items per page (default: 10, min: 1)

        Example:
            search_youth_activities(sido="서울", start_date="20250701", end_date="20250831")
        """
        try:
            result = await api_client.search_activities(
                at_name=program_name,
                org_name=organization,
                sido=sido,
                start_date=start_date,
                end_date=end_date,
                page_no=page_no,
                num_of_rows=num_of_rows,
            )
        except (ValidationError, YouthApiError) as e:
            logger.warning(f"search_youth_activities failed: {e}")
            return format_error(e)
        return format_activities(result)

    @mcp.tool
    async def get_youth_facility_groups(
        sido: str | None = None,
        facility_name: str | None = None,
        group_type: str | None = None,
        page_no: int = 1,
        num_of_rows: int = 10,
    ) -> str:
        """
        Get youth facility groups (youth centers, culture houses, training facilities, ...).

        Args:
            sido (str, optional): Sido name, e.g. "부산광역시"
            facility_name (str, optional): Institution name
            group_type (str, optional): Institution type name
            page_no (int, optional): Page number (default: 1, min: 1)
            num_of_rows (int, optional): Items per page (default: 10, min: 1)

        Example:
            get_youth_facility_groups(sido="부산광역시")
        """
        try:
            result = await api_client.get_facility_group_list(
                sido=sido,
                st_name=facility_name,
                g_name=group_type,
                page_no=page_no,
                num_of_rows=num_of_rows,
            )
        except (ValidationError, YouthApiError) as e:
            logger.warning(f"get_youth_facility_groups failed: {e}")
            return format_error(e)
        return format_facility_groups(result)

    @mcp.resource(
        YOUTH_INFO.uri,
        name=YOUTH_INFO.name,
        description=YOUTH_INFO.description,
        mime_type="text/plain",
    )
    def server_info() -> str:
        return read_document(YOUTH_INFO.uri)

    @mcp.resource(
        YOUTH_GUIDE.uri,
        name=YOUTH_GUIDE.name,
        description=YOUTH_GUIDE.description,
        mime_type="text/plain",
    )
    def usage_guide() -> str:
        return read_document(YOUTH_GUIDE.uri)

    @mcp.resource(
        YOUTH_SIDO_CODES.uri,
        name=YOUTH_SIDO_CODES.name,
        description=YOUTH_SIDO_CODES.description,
        mime_type="text/plain",
    )
    def sido_codes() -> str:
        return read_document(YOUTH_SIDO_CODES.uri)

    @mcp.prompt(name="find_activities", description="지역별 청소년 활동 찾기 안내")
    def find_activities(region: str = "서울") -> str:
        return find_activities_prompt(region)

    @mcp.prompt(name="facility_guide", description="지역별 청소년 시설 안내")
    def facility_guide(region: str = "서울") -> str:
        return facility_guide_prompt(region)

    mcp.custom_route("/health", methods=["GET"])(health_check)

    return mcp


def parse_server_config(args: list[str] | None = None) -> tuple[str, dict[str, Any]]:
    """
    Resolve the transport and its HTTP options.

    Command line flags win over the MCP_TRANSPORT, MCP_HOST, MCP_PORT,
    MCP_LOG_LEVEL and MCP_PATH environment variables. stdio gets no HTTP options.

    Raises:
        ValueError: if MCP_PORT is not an integer.
    """
    parser = argparse.ArgumentParser(description=SERVICE_NAME)
    parser.add_argument("--transport", choices=["stdio", *HTTP_TRANSPORTS])
    parser.add_argument("--host", help="HTTP bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, help="HTTP port (default: 8000)")
    parser.add_argument("--log-level", choices=LOG_LEVELS)
    parser.add_argument("--path", help="HTTP endpoint path (default: /mcp)")
    options = parser.parse_args(args)

    transport = options.transport or os.environ.get("MCP_TRANSPORT", "stdio")
    if transport not in HTTP_TRANSPORTS:
        return transport, {}

    if options.port is None:
        options.port = int(os.environ.get("MCP_PORT", "8000"))
    return transport, {
        "host": options.host or os.environ.get("MCP_HOST", "127.0.0.1"),
        "port": options.port,
        "log_level": options.log_level or os.environ.get("MCP_LOG_LEVEL", "INFO"),
        "path": options.path or os.environ.get("MCP_PATH", "/mcp"),
    }


def run_server(mcp: FastMCP, transport: str, http_config: dict[str, Any]) -> None:
    """Serve until the client disconnects; exit with status 1 if the server cannot run."""
    if transport == "stdio":
        logger.info(f"Serving {mcp.name} on stdio")
    elif transport in HTTP_TRANSPORTS:
        logger.info(
            f"Serving {mcp.name} on {transport} at "
            f"http://{http_config['host']}:{http_config['port']}{http_config['path']}"
        )
    else:
        logger.error(f"Unknown transport: {transport}")
        sys.exit(1)

    try:
        mcp.run(transport=transport, **http_config)
    except KeyboardInterrupt:
        logger.info(f"{mcp.name} stopped")
    except Exception as e:
        logger.error(f"{mcp.name} failed: {e}")
        sys.exit(1)


def main(args: list[str] | None = None) -> None:
    transport, http_config = parse_server_config(args)

    try:
        settings = load_settings()
    except StartupConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    logger.info(
        f"Using {YouthActivityApiClient.BASE_URL} with a {settings['timeout']}s timeout"
    )

    api_client = YouthActivityApiClient(**settings)
    run_server(create_server(api_client), transport, http_config)


if __name__ == "__main__":
    main()
