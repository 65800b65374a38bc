"""
Pinarkive API v2 client.

Every method maps onto one HTTP request and returns the raw response.
Responses are not inspected; decode them with ``await response.json()``.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any
from urllib.parse import quote

from .http import APIRequest
from .http import FileHTTPLogger
from .http import FormField
from .http import FormFile
from .http import FormPart
from .http import HTTPClient
from .http import Transport
from .types import FileContent
from .types import FileEntry
from .types import LocalFile
from .types import TokenOptions

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.pinarkive.com/api/v2"


def _segment(value: str) -> str:
    """Quote a value for use as a single path segment."""
    return quote(str(value), safe="")


class PinarkiveClient:
    """
    Async client for the Pinarkive pinning and storage API.

    Example:
        async with PinarkiveClient(api_key="pk-...") as client:
            resp = await client.upload_file("report.pdf")
            data = await resp.json()
            print(data["cid"])
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float | None = None,
        http: Transport | None = None,
        log_file: str | Path | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key sent as a Bearer token, or None for anonymous calls
            base_url: API root, a trailing slash is ignored
            timeout: Request timeout in seconds for the default transport, None for no limit
            http: Transport to send requests with (defaults to HTTPClient)
            log_file: Optional file to log HTTP traffic to
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http: Transport = http if http is not None else HTTPClient(timeout=timeout)

        if log_file:
            log_path = Path(log_file) if isinstance(log_file, str) else log_file
            set_logger = getattr(self._http, "set_logger", None)
            if set_logger is None:
                raise ValueError("log_file requires a transport that supports set_logger()")
            set_logger(FileHTTPLogger(log_path))
            logger.info(f"HTTP logging enabled: {log_path}")

    @classmethod
    def from_env(cls, **kwargs: Any) -> "PinarkiveClient":
        """
        Build a client from environment variables.

        Reads PINARKIVE_API_KEY, PINARKIVE_BASE_URL and PINARKIVE_TIMEOUT.
        Keyword arguments override the environment.
        """
        kwargs.setdefault("api_key", os.getenv("PINARKIVE_API_KEY") or None)
        kwargs.setdefault("base_url", os.getenv("PINARKIVE_BASE_URL") or DEFAULT_BASE_URL)
        timeout = os.getenv("PINARKIVE_TIMEOUT")
        if timeout and "timeout" not in kwargs:
            try:
                kwargs["timeout"] = float(timeout)
            except ValueError:
                raise ValueError(f"PINARKIVE_TIMEOUT must be a number of seconds, got {timeout!r}") from None
        return cls(**kwargs)

    @property
    def api_key(self) -> str | None:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        headers: dict[str, str] = {}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        parts: list[FormPart] | None = None,
        params: dict[str, int | str] | None = None,
    ) -> Any:
        request = APIRequest(
            method=method,
            url=f"{self._base_url}{path}",
            headers=self._headers(),
            json=json,
            parts=tuple(parts) if parts is not None else None,
            params=params,
        )
        return await self._http.send(request)

    # =========================================================================
    # File Management
    # =========================================================================

    async def upload_file(self, file_path: str | os.PathLike[str]) -> Any:
        """
        Upload a single file.

        Args:
            file_path: Local path of the file, streamed as the ``file`` part

        Raises:
            OSError: If the file cannot be opened
        """
        return await self._request("POST", "/files", parts=[FormFile("file", file_path)])

    async def upload_directory(self, dir_path: str) -> Any:
        """Upload a directory by path; the server resolves ``dir_path`` itself."""
        return await self._request("POST", "/files/directory", json={"dirPath": dir_path})

    async def upload_directory_dag(self, files: Sequence[FileEntry], dir_name: str | None = None) -> Any:
        """
        Upload a directory structure as a single DAG.

        Args:
            files: Entries in upload order. FileContent entries become the parts
                   ``files[i][path]`` and ``files[i][content]``, where ``i`` is the
                   entry's position in ``files``. LocalFile entries are streamed
                   under the plain name ``files``, without an index; the service
                   currently expects that naming.
            dir_name: Optional name for the resulting directory

        Raises:
            TypeError: If an entry is neither FileContent nor LocalFile
            OSError: If a LocalFile cannot be opened
        """
        parts: list[FormPart] = []
        if dir_name:
            parts.append(FormField("dirName", dir_name))

        for index, entry in enumerate(files):
            if isinstance(entry, FileContent):
                parts.append(FormField(f"files[{index}][path]", entry.path))
                parts.append(FormField(f"files[{index}][content]", entry.content))
            elif isinstance(entry, LocalFile):
                parts.append(FormFile("files", entry.path))
            else:
                raise TypeError(f"files[{index}] must be FileContent or LocalFile, got {type(entry).__name__}")

        return await self._request("POST", "/files/directory-dag", parts=parts)

    async def rename_file(self, upload_id: str, new_name: str) -> Any:
        """Rename an uploaded file."""
        return await self._request("PUT", f"/files/rename/{_segment(upload_id)}", json={"newName": new_name})

    async def pin_cid(self, cid: str, filename: str | None = None) -> Any:
        """
        Pin a CID to your account.

        Args:
            cid: Content identifier to pin
            filename: Optional display name stored with the pin
        """
        data: dict[str, str] = {}
        if filename:
            data["filename"] = filename
        return await self._request("POST", f"/files/pin/{_segment(cid)}", json=data)

    async def remove_file(self, cid: str) -> Any:
        """Remove a file from storage."""
        return await self._request("DELETE", f"/files/remove/{_segment(cid)}")

    async def list_uploads(self, page: int = 1, limit: int = 10) -> Any:
        """List uploaded files, one page at a time."""
        return await self._request("GET", "/users/me/uploads", params={"page": page, "limit": limit})

    # =========================================================================
    # Token Management
    # =========================================================================

    async def generate_token(self, name: str, options: TokenOptions | None = None) -> Any:
        """
        Generate an API token.

        Args:
            name: Name for the token
            options: Permissions, expiry and IP allowlist; unset fields are not sent
        """
        data: dict[str, Any] = {"name": name}
        if options is not None:
            data.update(options.to_payload())
        return await self._request("POST", "/tokens/generate", json=data)

    async def list_tokens(self) -> Any:
        return await self._request("GET", "/tokens/list")

    async def revoke_token(self, name: str) -> Any:
        return await self._request("DELETE", f"/tokens/revoke/{_segment(name)}")

    # =========================================================================
    # Status and Monitoring
    # =========================================================================

    async def get_status(self, cid: str) -> Any:
        """Get the pin status of a CID."""
        return await self._request("GET", f"/status/{_segment(cid)}")

    async def get_allocations(self, cid: str) -> Any:
        """Get the storage allocations of a CID."""
        return await self._request("GET", f"/status/allocations/{_segment(cid)}")

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._http.close()

    async def __aenter__(self) -> "PinarkiveClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
