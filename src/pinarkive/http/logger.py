"""
HTTP traffic logger for debugging and auditing.

Logs every API request and response to a file with timestamps,
direction indicators, and payloads. Credentials are masked and
uploaded file contents are never written.
"""

import json
from datetime import UTC
from datetime import datetime
from pathlib import Path
from typing import Any
from typing import Protocol


class HTTPLogger(Protocol):
    """Protocol for HTTP logging callbacks."""

    def log_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any,
    ) -> None:
        """Log an outgoing HTTP request."""
        ...

    def log_response(
        self,
        url: str,
        status: int,
        body: str,
    ) -> None:
        """Log an incoming HTTP response."""
        ...


SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "api-key"})


def mask_secret(value: str) -> str:
    """
    Mask a credential header value.

    An auth scheme prefix (``Bearer``) is kept. Of the key itself at most a
    fifth of its characters, and never more than 4, stay visible at each end,
    so short keys are hidden entirely.
    """
    scheme, sep, key = value.partition(" ")
    if not sep:
        scheme, key = "", value
    reveal = min(4, len(key) // 5)
    masked = "***" if len(key) < 10 else f"{key[:reveal]}...{key[-reveal:]}"
    return f"{scheme} {masked}" if scheme else masked


class FileHTTPLogger:
    """
    Logs Pinarkive API traffic to a file, one JSON record per line.

    Format:
        [timestamp] [direction] [type] payload

    Where:
        - timestamp: ISO 8601 format
        - direction: >>> for outgoing, <<< for incoming
        - type: REQUEST or RESPONSE
        - payload: JSON-formatted data; multipart bodies appear as the
          list of part names with text values or local file paths
    """

    def __init__(self, log_file: Path):
        """
        Initialize the file logger.

        Args:
            log_file: Path to the log file. Parent directories will be created
                      if they don't exist.
        """
        self.log_file = log_file
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.log_file.touch(exist_ok=True)

    def _append(self, direction: str, kind: str, payload: dict[str, Any]) -> None:
        timestamp = datetime.now(UTC).isoformat(timespec="milliseconds")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {direction} {kind} {json.dumps(payload, ensure_ascii=False)}\n")

    def log_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any,
    ) -> None:
        """Log an outgoing HTTP request."""
        safe_headers = {k: mask_secret(v) if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()}
        self._append(">>>", "REQUEST", {"method": method, "url": url, "headers": safe_headers, "body": body})

    def log_response(
        self,
        url: str,
        status: int,
        body: str,
    ) -> None:
        """Log an incoming HTTP response."""
        # Responses are usually JSON; keep raw text otherwise
        parsed_body: Any
        try:
            parsed_body = json.loads(body)
        except json.JSONDecodeError:
            parsed_body = body

        self._append(
            "<<<",
            "RESPONSE",
            {"url": url, "status": status, "bytes": len(body.encode("utf-8")), "body": parsed_body},
        )
