"""Helpers for slugs, retries and logging."""

from .logging_setup import setup_logging
from .numbers import generate_numbers
from .slugify import seems_utf8, slugify, utf8_uri_encode

__all__ = ["generate_numbers", "seems_utf8", "setup_logging", "slugify", "utf8_uri_encode"]
