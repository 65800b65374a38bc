"""
Async HTTP transport for Pinarkive API requests using aiohttp.
"""

import logging
import os
from contextlib import ExitStack
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import TYPE_CHECKING
from typing import Any
from typing import Protocol

import aiohttp

if TYPE_CHECKING:
    from .logger import HTTPLogger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormField:
    """Text part of a multipart body."""

    name: str
    value: str


@dataclass(frozen=True)
class FormFile:
    """File part of a multipart body, streamed from a local path."""

    name: str
    path: str | os.PathLike[str]


FormPart = FormField | FormFile


@dataclass(frozen=True)
class APIRequest:
    """
    A single request against the API.

    At most one of ``json`` and ``parts`` is set. ``parts`` keeps its order
    on the wire.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    json: Any = None
    parts: tuple[FormPart, ...] | None = None
    params: dict[str, int | str] | None = None


class Transport(Protocol):
    """Anything able to send an APIRequest."""

    async def send(self, request: APIRequest) -> Any:
        """Send the request and return the raw response."""
        ...

    async def close(self) -> None:
        """Release any held connections."""
        ...


class HTTPClient:
    """Async HTTP client for Pinarkive API requests."""

    def __init__(
        self,
        timeout: float | None = None,
        logger: "HTTPLogger | None" = None,
        raise_for_status: bool = False,
    ):
        """
        Initialize the client.

        Args:
            timeout: Total request timeout in seconds, passed to aiohttp.
                     None (the default) waits as long as the upload takes.
            logger: Optional HTTP traffic logger
            raise_for_status: Let aiohttp raise ClientResponseError on 4xx/5xx
                              instead of returning the response
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._logger = logger
        self._raise_for_status = raise_for_status

    def set_logger(self, logger: "HTTPLogger | None") -> None:
        """Set the HTTP logger."""
        self._logger = logger

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                raise_for_status=self._raise_for_status,
            )
        return self._session

    async def send(self, request: APIRequest) -> aiohttp.ClientResponse:
        """
        Send a request and return the response with its body already read.

        Files referenced by FormFile parts are opened here and closed once the
        request completes, whether it succeeded or not.

        Args:
            request: The request to send

        Returns:
            The aiohttp response. Its body is buffered, so ``await resp.json()``
            works after the connection has been released.

        Raises:
            OSError: If a FormFile path cannot be opened
            aiohttp.ClientError: On connection failures (or on error statuses
                                 when raise_for_status is enabled)
        """
        with ExitStack() as stack:
            kwargs: dict[str, Any] = {"headers": request.headers}
            if request.params is not None:
                kwargs["params"] = request.params
            if request.parts is not None:
                kwargs["data"] = _build_multipart(request.parts, stack)
            elif request.json is not None:
                kwargs["json"] = request.json

            # Log request
            if self._logger:
                self._logger.log_request(request.method, request.url, request.headers, _loggable_body(request))
            logger.debug(f"{request.method} {request.url}")

            session = await self._get_session()
            async with session.request(request.method, request.url, **kwargs) as resp:
                body = await resp.read()

                # Log response
                if self._logger:
                    self._logger.log_response(request.url, resp.status, body.decode("utf-8", errors="replace"))
                logger.debug(f"{request.method} {request.url} -> {resp.status}")

                return resp

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def _disposition_value(value: str) -> str:
    """
    Escape a Content-Disposition parameter for use inside double quotes.

    The value is otherwise sent as-is (UTF-8), so the service sees the real
    file name rather than a percent-encoded one. Line breaks are encoded the
    way HTML forms encode them, since they cannot appear in a header.
    """
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\r", "%0D").replace("\n", "%0A")


def _build_multipart(parts: tuple[FormPart, ...], stack: ExitStack) -> aiohttp.MultipartWriter:
    """Assemble a multipart/form-data body, registering opened files on the stack."""
    writer = aiohttp.MultipartWriter("form-data")
    for part in parts:
        name = _disposition_value(part.name)
        if isinstance(part, FormFile):
            handle = stack.enter_context(open(part.path, "rb"))
            payload = writer.append(handle)
            payload.set_content_disposition(
                "form-data",
                quote_fields=False,
                name=name,
                filename=_disposition_value(Path(part.path).name),
            )
        else:
            payload = writer.append(part.value)
            payload.set_content_disposition("form-data", quote_fields=False, name=name)
    return writer


def _loggable_body(request: APIRequest) -> Any:
    """Describe the request body for the traffic log without file contents."""
    if request.parts is not None:
        return {
            "multipart": [
                {"name": p.name, "file": os.fspath(p.path)}
                if isinstance(p, FormFile)
                else {"name": p.name, "value": p.value}
                for p in request.parts
            ]
        }
    if request.params is not None:
        return {"query": request.params}
    return request.json
