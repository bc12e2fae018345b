"""
Orderdaily API client
=====================

This package wraps the Orderdaily e-commerce platform's HTTP APIs: the
administrative **main** API (shops, orders, categories, attributes and
products) and the **partner** API used to create orders for a shop. Every
endpoint method returns an ``ApiResult`` rather than raising on HTTP errors.

Modules are organized by responsibility:

- ``client``: the ``Client`` class with one method per endpoint.
- ``schemas``: Pydantic models for settings, payload pieces and results.
- ``validation``: parameter checks and payload filtering.
- ``utils``: slug generation, random suffixes, retries and logging setup.
- ``config``: helpers for loading YAML configuration files and
  environment variables.
"""

from .client import Client
from .errors import ConfigurationError, OrderdailyError, ServerError
from .schemas.models import ApiResult, ClientConfig
from .utils.logging_setup import setup_logging
from .utils.slugify import slugify

__version__ = "1.1.0"

__all__ = [
    "ApiResult",
    "Client",
    "ClientConfig",
    "ConfigurationError",
    "OrderdailyError",
    "ServerError",
    "__version__",
    "setup_logging",
    "slugify",
]
