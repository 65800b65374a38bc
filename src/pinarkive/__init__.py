"""
pinarkive - Async client for the Pinarkive IPFS pinning API (v2).

Each method issues one HTTP request and returns the raw aiohttp response:

- File uploads (single file, server-side directory, directory DAG)
- Renaming, pinning and removing files
- Paginated upload listing
- API token generation, listing and revocation
- Pin status and storage allocations

Example:
    from pinarkive import FileContent, LocalFile, PinarkiveClient, TokenOptions

    async with PinarkiveClient(api_key="pk-...") as client:
        resp = await client.upload_directory_dag(
            [
                FileContent(path="index.html", content="<h1>Hello</h1>"),
                LocalFile("assets/logo.png"),
            ],
            dir_name="site",
        )
        print(await resp.json())

        resp = await client.generate_token("ci", TokenOptions(expires_in_days=30))
        print(await resp.json())

HTTP traffic can be written to a file for debugging:

    client = PinarkiveClient(api_key="pk-...", log_file="logs/http.log")
"""

from .client import DEFAULT_BASE_URL
from .client import PinarkiveClient
from .http import APIRequest
from .http import FileHTTPLogger
from .http import FormField
from .http import FormFile
from .http import HTTPClient
from .http import HTTPLogger
from .http import Transport
from .types import FileContent
from .types import FileEntry
from .types import LocalFile
from .types import TokenOptions

__all__ = [
    "DEFAULT_BASE_URL",
    "APIRequest",
    "FileContent",
    "FileEntry",
    "FileHTTPLogger",
    "FormField",
    "FormFile",
    "HTTPClient",
    "HTTPLogger",
    "LocalFile",
    "PinarkiveClient",
    "TokenOptions",
    "Transport",
]
