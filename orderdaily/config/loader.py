"""Read :class:`~orderdaily.schemas.models.ClientConfig` settings from YAML.

The settings may sit at the top level of the file or under an
``orderdaily`` key, next to whatever else the host application keeps
there. String values can reference environment variables as
``${ORDERDAILY_MAIN_API_KEY}`` or, with a fallback,
``${ORDERDAILY_APPLICATION_NAME:my-shop}``, so API keys stay out of the
file itself.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from ..schemas.models import ClientConfig

SECTION = "orderdaily"

_PLACEHOLDER = re.compile(r"\$\{(?P<name>[^:}]+)(?::(?P<default>[^}]*))?\}")


def _env_lookup(match: re.Match) -> str:
    return os.environ.get(match["name"], match["default"] or "")


def expand_env(value: Any) -> Any:
    """Replace ``${NAME:default}`` references in ``value`` and everything nested in it."""
    if isinstance(value, str):
        return _PLACEHOLDER.sub(_env_lookup, value)
    if isinstance(value, Mapping):
        return {key: expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    return value


def read_settings(path: Union[str, Path]) -> Dict[str, Any]:
    """Return the client settings mapping stored in ``path``, placeholders expanded."""
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    document = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    settings = document.get(SECTION, document)
    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ValueError(f"'{SECTION}' section must be a mapping: {path}")
    return expand_env(settings)


def load_config(path: Union[str, Path]) -> ClientConfig:
    """Load and validate the client settings in ``path``.

    Raises
    ------
    FileNotFoundError
        The file does not exist.
    ValueError
        The file or its ``orderdaily`` section is not a mapping.
    pydantic.ValidationError
        A setting has the wrong type, for example a non-numeric ``timeout``.
    """
    return ClientConfig.model_validate(read_settings(path))
