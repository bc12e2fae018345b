"""HTTP client for the Orderdaily main (admin) and partner APIs.

Every endpoint method returns an :class:`~orderdaily.schemas.models.ApiResult`.
Invalid parameters, HTTP error codes and malformed responses are reported
through ``ApiResult(error=True, value=<message>)``; only a missing
application name or API key raises (:class:`~orderdaily.errors.ConfigurationError`).

* The main API authenticates with ``Authorization: Bearer <key>``.
* The partner API authenticates with ``Authorization: <key>``.

A response with status 500 is re-attempted once before it is reported.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import requests
from pydantic import ValidationError

from .config import load_config
from .errors import ConfigurationError, ServerError
from .schemas.models import (
    ORDER_STATUSES,
    PRODUCT_STATUSES,
    SORT_ORDERS,
    VAT_TYPES,
    ApiResult,
    ClientConfig,
    OrderRequest,
)
from .utils.logging_setup import LOGGER_NAME
from .utils.numbers import generate_numbers
from .utils.retry import retry_call
from .utils.slugify import slugify
from .validation import (
    ImageStatus,
    filter_categories,
    filter_images,
    filter_variations,
    validate_choice,
)

USER_AGENT_PREFIX = "orderdaily-api-python/"

_ERROR_MESSAGES = {
    400: "API endpoint not found.",
    403: "API key invalid. Please check if your configuration is correct.",
    404: "Item not found.",
}
_WRITE_ERROR_MESSAGES = {**_ERROR_MESSAGES, 422: "Data can't be processed."}
_READ_SUCCESS = frozenset({200})
_WRITE_SUCCESS = frozenset({200, 201})
_SERVER_ERROR = 500


class Client:
    """Client for the Orderdaily APIs.

    Parameters
    ----------
    config: ClientConfig | dict | None
        Client settings. Missing values can be filled in later with the
        ``set_*`` methods.
    session: requests.Session | None
        Session used for all HTTP calls. A new one is created when omitted.
    logger: logging.Logger | None
        Logger for request tracing. Defaults to ``orderdaily.Client``.
    """

    def __init__(
        self,
        config: Union[ClientConfig, Dict[str, Any], None] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if config is None:
            config = ClientConfig()
        elif not isinstance(config, ClientConfig):
            config = ClientConfig.model_validate(config)
        self.config = config
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(f"{LOGGER_NAME}.{self.__class__.__name__}")

    @classmethod
    def from_config_file(cls, path: Union[str, Path], **kwargs: Any) -> "Client":
        """Build a client from a YAML file (see :func:`orderdaily.config.load_config`)."""
        return cls(load_config(path), **kwargs)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_application_name(self, name: str) -> None:
        """Set the application name, this is included in the User-Agent header."""
        self.config.application_name = name

    def set_main_api_key(self, key: str) -> None:
        self.config.main_api_key = key

    def set_partner_api_key(self, key: str) -> None:
        self.config.partner_api_key = key

    def set_config(self, name: str, value: Any) -> None:
        """Set a known setting (validated) or store an extra value under ``name``."""
        setattr(self.config, name, value)

    def get_config(self, name: str, default: Any = None) -> Any:
        """Return a setting or an extra value, ``default`` when absent or ``None``."""
        if name in type(self.config).model_fields:
            value = getattr(self.config, name)
        else:
            value = (self.config.model_extra or {}).get(name)
        return default if value is None else value

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _base_headers(self) -> Dict[str, str]:
        if not self.config.application_name:
            raise ConfigurationError("Application is not defined.")
        return {
            "User-Agent": USER_AGENT_PREFIX + self.config.application_name,
            "Content-Type": "application/json",
        }

    def _main_headers(self) -> Dict[str, str]:
        headers = self._base_headers()
        if not self.config.main_api_key:
            raise ConfigurationError("Main API Key is not defined.")
        headers["Authorization"] = f"Bearer {self.config.main_api_key}"
        return headers

    def _partner_headers(self) -> Dict[str, str]:
        headers = self._base_headers()
        if not self.config.partner_api_key:
            raise ConfigurationError("Partner API Key is not defined.")
        headers["Authorization"] = self.config.partner_api_key
        return headers

    def _main_url(self, path: str) -> str:
        return f"{self.config.main_api_base}{path}"

    def _partner_url(self, path: str) -> str:
        return f"{self.config.partner_api_base}{path}"

    def _send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> ApiResult:
        """Perform one request and map the response onto an ``ApiResult``."""
        write = method != "GET"
        self.logger.debug(f"{method} {url} params={params}")
        response = self.session.request(
            method,
            url,
            headers=headers,
            params=params,
            json=payload if write else None,
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
            allow_redirects=True,
        )
        code = response.status_code
        self.logger.debug(f"{method} {url} -> {code}")

        try:
            body = response.json()
        except ValueError:
            return ApiResult.failure("Invalid JSON response.")

        if code == _SERVER_ERROR:
            raise ServerError(code, url)
        if code in (_WRITE_SUCCESS if write else _READ_SUCCESS):
            return ApiResult.success(body)
        messages = _WRITE_ERROR_MESSAGES if write else _ERROR_MESSAGES
        return ApiResult.failure(messages.get(code, f"Unknown error. Code: {code}"))

    def _request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> ApiResult:
        try:
            return retry_call(
                self._send,
                method,
                url,
                headers,
                params,
                payload,
                exceptions=(ServerError,),
                attempts=2,
                wait=self.config.retry_wait,
            )
        except ServerError as exc:
            self.logger.warning(f"{method} {url} failed after retry: {exc}")
            return ApiResult.failure(f"Server error. Code: {exc.status_code}")
        except requests.RequestException as exc:
            self.logger.exception(f"{method} {url} failed")
            return ApiResult.failure(f"Request failed: {exc}")

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> ApiResult:
        return self._request("GET", self._main_url(path), self._main_headers(), params=params)

    def _write(self, method: str, path: str, payload: Dict[str, Any]) -> ApiResult:
        return self._request(method, self._main_url(path), self._main_headers(), payload=payload)

    @staticmethod
    def _page(per_page: int, page: int) -> Dict[str, Any]:
        return {"per_page": per_page, "page": page}

    @staticmethod
    def _make_slug(name: str) -> str:
        return f"{slugify(name)}-{generate_numbers()}"

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def _head(self, url: str) -> Optional[requests.Response]:
        try:
            response = self.session.head(
                url,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            self.logger.debug(f"HEAD {url} failed: {exc}")
            return None
        if response.status_code >= 400:
            return None
        return response

    def image_exists(self, url: str) -> bool:
        """Check if an image URL answers a HEAD request without an error status."""
        return self._head(url) is not None

    def _image_status(self, url: str) -> ImageStatus:
        response = self._head(url)
        if response is None:
            return ImageStatus(reachable=False)
        length = response.headers.get("Content-Length")
        try:
            size = int(length) if length is not None else None
        except ValueError:
            size = None
        return ImageStatus(reachable=True, size=size)

    def _product_lists(
        self,
        images: Optional[Iterable[Any]],
        category_ids: Optional[Iterable[Any]],
        variations: Optional[Iterable[Any]],
    ) -> Dict[str, Any]:
        lists: Dict[str, Any] = {}
        if images is not None:
            lists["images"] = filter_images(images, self._image_status)
        if category_ids is not None:
            lists["categories"] = filter_categories(category_ids)
        if variations is not None:
            lists["variations"] = filter_variations(variations)
        return lists

    # ------------------------------------------------------------------
    # Shops and orders
    # ------------------------------------------------------------------

    def get_shops(self, per_page: int = 10, page: int = 1) -> ApiResult:
        """Returns all shops. [Admin]"""
        return self._get("/api/v1/shops", self._page(per_page, page))

    def get_orders(
        self,
        order_by: str = "DESC",
        status: Optional[str] = None,
        per_page: int = 10,
        page: int = 1,
    ) -> ApiResult:
        """Returns all orders. [Admin]

        ``order_by`` is ``asc`` or ``desc``; ``status`` is one of pending,
        paid, shipped, completed, returned or canceled.
        """
        for check in (
            validate_choice(order_by, SORT_ORDERS, "Invalid order_by parameter.", required=True),
            validate_choice(status, ORDER_STATUSES, "Invalid status parameter."),
        ):
            if not check.ok:
                return ApiResult.failure(check.reason)

        params = self._page(per_page, page)
        params["order_by"] = order_by
        if status is not None:
            params["status"] = status
        return self._get("/api/v1/orders", params)

    def get_shop(self, shop_id: int) -> ApiResult:
        """Returns shop information. [Shop Manager]"""
        return self._get(f"/api/v1/shops/{shop_id}")

    def get_shop_orders(self, shop_id: int, per_page: int = 10, page: int = 1) -> ApiResult:
        return self._get(f"/api/v1/shops/{shop_id}/orders", self._page(per_page, page))

    def get_shop_products(self, shop_id: int, per_page: int = 10, page: int = 1) -> ApiResult:
        return self._get(f"/api/v1/shops/{shop_id}/products", self._page(per_page, page))

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def get_categories(self, per_page: int = 10, page: int = 1) -> ApiResult:
        return self._get("/api/v1/categories", self._page(per_page, page))

    def get_category(self, category_id: int) -> ApiResult:
        return self._get(f"/api/v1/categories/{category_id}")

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def get_attributes(self, per_page: int = 10, page: int = 1) -> ApiResult:
        return self._get("/api/v1/attributes", self._page(per_page, page))

    def get_attribute(self, attribute_id: int) -> ApiResult:
        return self._get(f"/api/v1/attributes/{attribute_id}")

    def create_attribute(self, name: str, description: str) -> ApiResult:
        """Creates an attribute with a unique slug derived from ``name``. [Admin]"""
        payload = {
            "name": name,
            "slug": self._make_slug(name),
            "description": description,
        }
        return self._write("POST", "/api/v1/attributes", payload)

    def delete_attribute(self, attribute_id: int) -> ApiResult:
        return self._write("DELETE", f"/api/v1/attributes/{attribute_id}", {})

    def get_attribute_values(self, attribute_id: int, per_page: int = 10, page: int = 1) -> ApiResult:
        return self._get(
            f"/api/v1/attributes/{attribute_id}/attribute_values",
            self._page(per_page, page),
        )

    def get_attribute_value(self, attribute_id: int, attribute_value_id: int) -> ApiResult:
        return self._get(f"/api/v1/attributes/{attribute_id}/attribute_values/{attribute_value_id}")

    def create_attribute_value(self, attribute_id: int, name: str) -> ApiResult:
        return self._write(
            "POST",
            f"/api/v1/attributes/{attribute_id}/attribute_values",
            {"value": name},
        )

    def delete_attribute_value(self, attribute_id: int, attribute_value_id: int) -> ApiResult:
        return self._write(
            "DELETE",
            f"/api/v1/attributes/{attribute_id}/attribute_values/{attribute_value_id}",
            {},
        )

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def get_products(self, per_page: int = 10, page: int = 1) -> ApiResult:
        return self._get("/api/v1/products", self._page(per_page, page))

    def get_product(self, product_id: int) -> ApiResult:
        return self._get(f"/api/v1/products/{product_id}")

    def create_product(
        self,
        name: str,
        shop_id: int,
        status: str,
        description: str,
        price: float,
        is_large: bool,
        weight: int,
        sku: str,
        manage_stock: bool,
        stock_value: int,
        vat_type: str,
        seo_title: str,
        seo_description: str,
        images: Optional[Iterable[Any]] = None,
        category_ids: Optional[Iterable[Any]] = None,
        variations: Optional[Iterable[Any]] = None,
    ) -> ApiResult:
        """Creates a product. [Admin]

        Parameters
        ----------
        status: str
            ``draft``, ``available`` or ``archived``.
        vat_type: str
            ``high`` or ``low``.
        images: Iterable
            Image URLs or base64 data. Unreachable URLs, invalid data and
            anything over 10 MiB is dropped.
        category_ids: Iterable
            Category ids; non-integers are dropped.
        variations: Iterable
            Mappings with ``attribute_value_id``, ``manage_stock`` and
            ``stock``; incomplete or mistyped entries are dropped.
        """
        for check in (
            validate_choice(status, PRODUCT_STATUSES, "Invalid status parameter."),
            validate_choice(vat_type, VAT_TYPES, "Invalid VAT parameter."),
        ):
            if not check.ok:
                return ApiResult.failure(check.reason)

        lists = self._product_lists(images or [], category_ids or [], variations or [])
        payload = {
            "name": name,
            "slug": self._make_slug(name),
            "shop_id": shop_id,
            "status": status,
            "content": description,
            "price": price,
            "large": is_large,
            "weight": weight,
            "sku": sku,
            "manage_stock": manage_stock,
            "stock": stock_value,
            "vat_type": vat_type,
            "seo_title": seo_title,
            "seo_description": seo_description,
            **lists,
        }
        return self._write("POST", "/api/v1/products", payload)

    def update_product(
        self,
        product_id: int,
        name: Optional[str] = None,
        shop_id: Optional[int] = None,
        status: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[float] = None,
        is_large: Optional[bool] = None,
        weight: Optional[int] = None,
        sku: Optional[str] = None,
        manage_stock: Optional[bool] = None,
        stock_value: Optional[int] = None,
        vat_type: Optional[str] = None,
        seo_title: Optional[str] = None,
        seo_description: Optional[str] = None,
        images: Optional[Iterable[Any]] = None,
        category_ids: Optional[Iterable[Any]] = None,
        variations: Optional[Iterable[Any]] = None,
    ) -> ApiResult:
        """Updates a product; only the given fields are sent. [Admin]

        A new ``name`` also gets a fresh slug.
        """
        for check in (
            validate_choice(status, PRODUCT_STATUSES, "Invalid status parameter."),
            validate_choice(vat_type, VAT_TYPES, "Invalid VAT parameter."),
        ):
            if not check.ok:
                return ApiResult.failure(check.reason)

        fields = {
            "name": name,
            "shop_id": shop_id,
            "status": status,
            "content": description,
            "price": price,
            "large": is_large,
            "weight": weight,
            "sku": sku,
            "manage_stock": manage_stock,
            "stock": stock_value,
            "vat_type": vat_type,
            "seo_title": seo_title,
            "seo_description": seo_description,
        }
        payload = {key: value for key, value in fields.items() if value is not None}
        if name is not None:
            payload["slug"] = self._make_slug(name)
        payload.update(self._product_lists(images, category_ids, variations))
        return self._write("PUT", f"/api/v1/products/{product_id}", payload)

    def delete_product(self, product_id: int) -> ApiResult:
        return self._write("DELETE", f"/api/v1/products/{product_id}", {})

    # ------------------------------------------------------------------
    # Partner API
    # ------------------------------------------------------------------

    def create_order(
        self,
        firstname: str,
        lastname: str,
        street: str,
        house_number: str,
        postal_code: str,
        city: str,
        note: Optional[str] = None,
    ) -> ApiResult:
        """Creates a new order. [Per Shop]"""
        try:
            order = OrderRequest(
                firstname=firstname,
                lastname=lastname,
                street=street,
                house_number=house_number,
                postal_code=postal_code,
                city=city,
                note=note,
            )
        except ValidationError as exc:
            self.logger.debug(f"Rejected order data: {exc}")
            return ApiResult.failure("Invalid order data.")
        return self._request(
            "POST",
            self._partner_url("/api/orders/create"),
            self._partner_headers(),
            payload=order.model_dump(),
        )
