"""HTTP transport submodule for the Pinarkive client."""

from .client import APIRequest
from .client import FormField
from .client import FormFile
from .client import FormPart
from .client import HTTPClient
from .client import Transport
from .logger import FileHTTPLogger
from .logger import HTTPLogger

__all__ = [
    "APIRequest",
    "FileHTTPLogger",
    "FormField",
    "FormFile",
    "FormPart",
    "HTTPClient",
    "HTTPLogger",
    "Transport",
]
