# middleware.py
import logging
from typing import Optional

from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools.tool import ToolResult
from pydantic import ValidationError as PydanticValidationError

from mcp_youth.errors import ValidationError
from mcp_youth.formatting import format_error


logger = logging.getLogger(__name__)

_MISSING_TYPES = ("missing", "missing_argument")


def _find_arguments_error(error: BaseException) -> Optional[PydanticValidationError]:
    # FastMCP may wrap the pydantic error in a ToolError
    while error is not None:
        if isinstance(error, PydanticValidationError):
            return error
        error = error.__cause__ or error.__context__
    return None


def describe_arguments_error(error: PydanticValidationError) -> str:
    """Summarize a pydantic argument error as missing and malformed argument names."""
    missing: list[str] = []
    invalid: list[str] = []
    for detail in error.errors():
        name = str(detail["loc"][0]) if detail["loc"] else "arguments"
        names = missing if detail["type"] in _MISSING_TYPES else invalid
        if name not in names:
            names.append(name)

    parts = []
    if missing:
        parts.append(f"필수 인자가 없습니다: {', '.join(missing)}")
    if invalid:
        parts.append(f"인자 형식이 올바르지 않습니다: {', '.join(invalid)}")
    return "; ".join(parts)


class ArgumentValidationMiddleware(Middleware):
    """
    Turn tool argument validation failures into soft failures.

    A call with a missing or mistyped argument is answered with the same
    "오류: ..." text a handler returns for its own ValidationError, instead of
    a protocol error. Unknown tools and other failures pass through unchanged.
    """

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        try:
            return await call_next(context)
        except Exception as e:
            arguments_error = _find_arguments_error(e)
            if arguments_error is None:
                raise

        error = ValidationError(describe_arguments_error(arguments_error))
        logger.warning(f"{context.message.name} rejected arguments: {error}")
        text = format_error(error)
        return ToolResult(content=text, structured_content={"result": text})
