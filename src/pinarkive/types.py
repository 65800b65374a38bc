"""
Request types for the Pinarkive client.
"""

import os
from dataclasses import dataclass
from typing import Any

# =============================================================================
# Directory DAG Entries
# =============================================================================


@dataclass(frozen=True)
class FileContent:
    """
    In-memory file for a directory DAG upload.

    Sent as two text parts, ``files[i][path]`` and ``files[i][content]``.
    """

    path: str  # Path of the file inside the uploaded directory
    content: str


@dataclass(frozen=True)
class LocalFile:
    """
    File on disk for a directory DAG upload.

    Streamed as a single file part named ``files``.
    """

    path: str | os.PathLike[str]


FileEntry = FileContent | LocalFile


# =============================================================================
# Token Management
# =============================================================================


@dataclass
class TokenOptions:
    """Optional settings for a generated API token."""

    permissions: list[str] | None = None
    expires_in_days: int | None = None
    ip_allowlist: list[str] | None = None  # Addresses allowed to use the token

    def to_payload(self) -> dict[str, Any]:
        """Return the fields that are set, keyed by their wire names."""
        payload: dict[str, Any] = {}
        if self.permissions is not None:
            payload["permissions"] = self.permissions
        if self.expires_in_days is not None:
            payload["expiresInDays"] = self.expires_in_days
        if self.ip_allowlist is not None:
            payload["ipAllowlist"] = self.ip_allowlist
        return payload
