"""
Tool dispatcher for the YouTube138 MCP server.

Maps a tool invocation onto one GET request against the RapidAPI YouTube138
endpoint and relays the JSON body.

Errors travel on two channels:
- Invocation errors (no arguments, unknown tool, missing parameter, missing
  credential) are raised before any network call.
- Upstream errors (network failure, timeout, non-2xx status) are captured and
  returned as the payload of a normal ToolResult.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union
from dataclasses import dataclass, field

import httpx

from config.settings import RAPIDAPI_KEY_ENV, Settings
from .tool_registry import MCPToolRegistry, create_mcp_tool_registry

logger = logging.getLogger(__name__)


class ToolInvocationError(Exception):
    """Base exception for invocations rejected before reaching upstream."""
    pass


class MissingArgumentsError(ToolInvocationError):
    """Raised when a tool call carries no arguments object at all."""

    def __init__(self):
        super().__init__("Missing required arguments")


class UnknownToolError(ToolInvocationError):
    """Raised when the tool name is not in the registry."""

    def __init__(self, name: str):
        self.tool_name = name
        super().__init__(f"Unknown tool: {name}")


class MissingParameterError(ToolInvocationError):
    """Raised when a required tool parameter is absent."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}")


class MissingCredentialError(ToolInvocationError):
    """Raised when no RapidAPI key is configured."""

    def __init__(self):
        super().__init__(
            f"{RAPIDAPI_KEY_ENV} environment variable is not set. "
            "Please set your RapidAPI key first."
        )


@dataclass(frozen=True)
class UpstreamRequest:
    """Path and query parameters of one upstream GET."""
    path: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UpstreamError:
    """Failed upstream call, relayed to the caller as data."""
    message: str
    status_code: Optional[int] = None
    details: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a dispatched invocation: upstream JSON or an UpstreamError."""
    payload: Union[UpstreamError, Any]

    @property
    def is_error(self) -> bool:
        return isinstance(self.payload, UpstreamError)

    def to_json(self) -> Any:
        """JSON-serializable form of the payload."""
        if self.is_error:
            return self.payload.to_dict()
        return self.payload

    @property
    def text(self) -> str:
        """Payload as pretty-printed JSON text."""
        return json.dumps(self.to_json(), indent=2, ensure_ascii=False)


def _response_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to text (or None if empty)."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class ToolDispatcher:
    """
    Executes tool invocations against the YouTube138 API.

    Holds no state besides the immutable settings; every invocation issues a
    fresh request.
    """

    def __init__(
        self,
        settings: Settings,
        registry: Optional[MCPToolRegistry] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the dispatcher.

        Args:
            settings: Application settings carrying the RapidAPI key
            registry: Tool registry (defaults to the standard three tools)
            transport: Optional httpx transport, used to stub the network in tests
        """
        self.settings = settings
        self.registry = registry or create_mcp_tool_registry()
        self._transport = transport

    def resolve(self, name: str, arguments: Optional[Mapping[str, Any]]) -> UpstreamRequest:
        """
        Validate an invocation and map it to an upstream request.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            UpstreamRequest with the route path and query parameters

        Raises:
            MissingArgumentsError: If arguments is None
            UnknownToolError: If the tool name has no route
            MissingParameterError: If a required parameter is absent or empty
        """
        if arguments is None:
            raise MissingArgumentsError()

        route = self.registry.get_route(name)
        if route is None:
            raise UnknownToolError(name)

        params: Dict[str, Any] = {}
        for parameter in route.required:
            value = arguments.get(parameter)
            if not value:
                raise MissingParameterError(parameter)
            params[parameter] = value

        for parameter, default in route.defaults.items():
            params[parameter] = arguments.get(parameter) or default

        return UpstreamRequest(path=route.path, params=params)

    def _headers(self) -> Dict[str, str]:
        return {
            "X-RapidAPI-Host": self.settings.rapidapi_host,
            "X-RapidAPI-Key": self.settings.rapidapi_key,
        }

    async def fetch(self, request: UpstreamRequest) -> ToolResult:
        """
        Perform the upstream GET for a resolved request.

        Args:
            request: Resolved upstream request

        Returns:
            ToolResult with the JSON body, or an UpstreamError payload

        Raises:
            MissingCredentialError: If no RapidAPI key is configured
        """
        if not self.settings.has_credentials:
            raise MissingCredentialError()

        url = f"{self.settings.base_url}{request.path}"
        logger.debug("GET %s params=%s", url, request.params)

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self.settings.request_timeout
        ) as client:
            try:
                response = await client.get(url, params=request.params, headers=self._headers())
                response.raise_for_status()
                return ToolResult(_response_body(response))
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.warning("YouTube138 API returned %s for %s", status_code, request.path)
                return ToolResult(UpstreamError(
                    message=f"API request failed: {e}",
                    status_code=status_code,
                    details=_response_body(e.response),
                ))
            except httpx.RequestError as e:
                logger.warning("Network error calling YouTube138 API %s: %r", request.path, e)
                return ToolResult(UpstreamError(
                    message=f"API request failed: {str(e) or type(e).__name__}",
                ))

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        """
        Execute a single tool invocation.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            ToolResult relaying the upstream response or upstream error

        Raises:
            ToolInvocationError: If the invocation is rejected before the network call
        """
        request = self.resolve(name, arguments)
        return await self.fetch(request)


def create_tool_dispatcher(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> ToolDispatcher:
    """
    Factory function to create a tool dispatcher.

    Args:
        settings: Application settings
        transport: Optional httpx transport override

    Returns:
        ToolDispatcher instance
    """
    return ToolDispatcher(settings, transport=transport)
