# demo_server.py
import logging
from typing import Annotated, Union

from fastmcp import FastMCP
from pydantic import Field

from mcp_youth.documents import (
    DEMO_GREETING,
    DEMO_HELP_PROMPT,
    DEMO_INFO,
    read_document,
    welcome_prompt,
)
from mcp_youth.errors import ValidationError
from mcp_youth.formatting import format_error, format_number, format_time
from mcp_youth.middleware import ArgumentValidationMiddleware
from mcp_youth.server import parse_server_config, run_server


logger = logging.getLogger(__name__)

Number = Union[int, float]

OPERATIONS = ("add", "subtract", "multiply", "divide")

Operation = Annotated[str, Field(json_schema_extra={"enum": list(OPERATIONS)})]


def calculate_result(operation: str, a: Number, b: Number) -> Number:
    """
    Apply one of the four arithmetic operations.

    Raises:
        ValidationError: for an unknown operation or division by zero.
    """
    if operation == "add":
        return a + b
    if operation == "subtract":
        return a - b
    if operation == "multiply":
        return a * b
    if operation == "divide":
        if b == 0:
            raise ValidationError("0으로 나눌 수 없습니다")
        return a / b
    raise ValidationError(f"알 수 없는 연산: {operation}")


def create_demo_server() -> FastMCP:
    """Build the generic MCP test server (echo, calculate, get_time)."""
    mcp = FastMCP(
        name="mcp-test-server",
        instructions="MCP 기본 기능(도구, 리소스, 프롬프트)을 시험하기 위한 서버입니다.",
    )
    mcp.add_middleware(ArgumentValidationMiddleware())

    @mcp.tool
    def echo(message: str) -> str:
        """입력받은 메시지를 그대로 반환합니다"""
        return f"Echo: {message}"

    @mcp.tool
    def calculate(operation: Operation, a: Number, b: Number) -> str:
        """
        간단한 수학 계산을 수행합니다 (덧셈, 뺄셈, 곱셈, 나눗셈)

        Args:
            operation: 수행할 연산 (add, subtract, multiply, divide)
            a: 첫 번째 숫자
            b: 두 번째 숫자
        """
        try:
            result = calculate_result(operation, a, b)
        except ValidationError as e:
            logger.warning(f"calculate failed: {e}")
            return format_error(e)
        return f"{format_number(a)} {operation} {format_number(b)} = {format_number(result)}"

    @mcp.tool
    def get_time() -> str:
        """현재 시간을 반환합니다"""
        return format_time()

    @mcp.resource(
        DEMO_INFO.uri,
        name=DEMO_INFO.name,
        description=DEMO_INFO.description,
        mime_type="text/plain",
    )
    def server_info() -> str:
        return read_document(DEMO_INFO.uri)

    @mcp.resource(
        DEMO_GREETING.uri,
        name=DEMO_GREETING.name,
        description=DEMO_GREETING.description,
        mime_type="text/plain",
    )
    def greeting() -> str:
        return read_document(DEMO_GREETING.uri)

    @mcp.prompt(name="welcome", description="사용자를 환영하는 프롬프트")
    def welcome(name: str = "사용자") -> str:
        return welcome_prompt(name)

    @mcp.prompt(name="help", description="서버 사용법을 안내하는 프롬프트")
    def help_prompt() -> str:
        return DEMO_HELP_PROMPT

    return mcp


def main(args: list[str] | None = None) -> None:
    transport, http_config = parse_server_config(args)
    run_server(create_demo_server(), transport, http_config)


if __name__ == "__main__":
    main()
