"""Exceptions raised by the Orderdaily client.

Only misconfiguration is raised to callers. Problems with a request itself
(bad parameters, HTTP error codes, malformed responses) come back as an
:class:`~orderdaily.schemas.models.ApiResult` with ``error=True``.
"""

from __future__ import annotations


class OrderdailyError(Exception):
    """Base class for all client errors."""


class ConfigurationError(OrderdailyError):
    """The application name or an API key required for a call is missing."""


class ServerError(OrderdailyError):
    """The API answered with a server error; the request may be retried."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"Server error {status_code} from {url}")
        self.status_code = status_code
        self.url = url
