"""Validation and filtering of caller-supplied request parameters.

Purpose:
- Reject enum-like parameters (sort order, statuses, VAT type) before any
  request is made, with a message suitable for an error ``ApiResult``.
- Quietly drop list entries that the API would refuse (unreachable or
  oversized images, non-integer category ids, incomplete variations).
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

from pydantic import HttpUrl, TypeAdapter, ValidationError

from .schemas.models import Variation

MAX_IMAGE_SIZE = 10 * 1024 * 1024

_HTTP_URL = TypeAdapter(HttpUrl)


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class ImageStatus:
    """What a HEAD request revealed about an image URL.

    ``size`` is the advertised ``Content-Length`` and stays ``None`` when the
    server does not send a usable one.
    """

    reachable: bool
    size: Optional[int] = None

    @property
    def acceptable(self) -> bool:
        return self.reachable and (self.size is None or 0 <= self.size <= MAX_IMAGE_SIZE)


def validate_choice(
    value: Optional[str],
    allowed: Sequence[str],
    message: str,
    required: bool = False,
) -> ValidationResult:
    """Check ``value`` case-insensitively against ``allowed``.

    ``None`` means the parameter was not given and is accepted unless
    ``required`` is set.
    """
    if value is None:
        return ValidationResult(not required, message if required else None)
    if not isinstance(value, str) or value.lower() not in allowed:
        return ValidationResult(False, message)
    return ValidationResult(True)


def is_http_url(value: str) -> bool:
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    return True


def decode_base64(value: str) -> Optional[bytes]:
    """Return the decoded bytes of strict base64 input, or ``None``."""
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return None


def filter_images(
    images: Iterable[Any],
    check: Callable[[str], ImageStatus],
) -> List[str]:
    """Keep the images the API can accept.

    Parameters
    ----------
    images: Iterable[Any]
        Image URLs or base64 encoded image data.
    check: Callable[[str], ImageStatus]
        Called once for each URL.

    Returns
    -------
    List[str]
        Reachable URLs and base64 payloads no larger than 10 MiB.
    """
    filtered: List[str] = []
    for image in images:
        if not isinstance(image, str):
            continue
        if is_http_url(image):
            if check(image).acceptable:
                filtered.append(image)
            continue
        decoded = decode_base64(image)
        if decoded is not None and len(decoded) <= MAX_IMAGE_SIZE:
            filtered.append(image)
    return filtered


def filter_categories(category_ids: Iterable[Any]) -> List[int]:
    # bool is a subclass of int but never a category id
    return [c for c in category_ids if isinstance(c, int) and not isinstance(c, bool)]


def filter_variations(variations: Iterable[Any]) -> List[dict]:
    """Keep well-formed variations, reduced to the keys the API reads."""
    filtered: List[dict] = []
    for variation in variations:
        if not isinstance(variation, Mapping):
            continue
        try:
            filtered.append(Variation.model_validate(dict(variation)).model_dump())
        except ValidationError:
            continue
    return filtered
