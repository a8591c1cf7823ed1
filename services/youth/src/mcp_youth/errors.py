from typing import Optional

from fastmcp.exceptions import NotFoundError


class StartupConfigError(Exception):
    """Required configuration is missing or invalid at startup"""

    pass


class UnknownOperationError(NotFoundError):
    """Tool, resource or prompt identifier is not registered"""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"Unknown {kind}: {identifier}")
        self.kind = kind
        self.identifier = identifier


class ValidationError(ValueError):
    """Argument is missing or has an invalid value"""

    pass


class YouthApiError(Exception):
    """Base exception for Youth Activity API errors"""

    def __init__(
        self,
        message: str,
        response: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.response = response
        self.url = url

    def __str__(self) -> str:
        base_str = super().__str__()
        if self.response:
            base_str += f" - {self.response}"
        return base_str


class TransportError(YouthApiError):
    """Network failure, timeout or HTTP error status from the API"""

    def __init__(
        self,
        message: str,
        response: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, response=response, url=url)
        self.status_code = status_code


class ParseError(YouthApiError):
    """Response body is not well-formed XML"""

    pass


class UpstreamApiError(YouthApiError):
    """API answered with a non-success result code"""

    def __init__(
        self, message: str, result_code: Optional[str] = None, url: Optional[str] = None
    ):
        super().__init__(message, url=url)
        self.result_code = result_code


class UnexpectedFormatError(YouthApiError):
    """Response parsed but does not have the expected envelope"""

    pass
