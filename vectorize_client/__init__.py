"""Client library for the Cloudflare Vectorize HTTP API."""

import logging

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .ports import AsyncHttpxTransport, InMemoryTransport, RecordedRequest, RequestsTransport

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    *_core_all,
    "AsyncHttpxTransport",
    "InMemoryTransport",
    "RecordedRequest",
    "RequestsTransport",
]
