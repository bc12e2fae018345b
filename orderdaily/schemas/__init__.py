"""Pydantic schemas for settings, payloads and results."""

from .models import ApiResult, ClientConfig, OrderRequest, Variation

__all__ = ["ApiResult", "ClientConfig", "OrderRequest", "Variation"]
