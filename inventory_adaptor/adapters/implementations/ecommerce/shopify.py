import json
import time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Type, Union

import httpx
from pydantic import ValidationError

from inventory_adaptor.adapters.interfaces.connector import APIConnector, HttpMethod, ResourceT
from inventory_adaptor.core.config import Settings, get_settings
from inventory_adaptor.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    IntegrationException,
    NotFoundError,
    RateLimitError,
    ResponseDecodingError,
    ResponseError,
)
from inventory_adaptor.core.logging import get_logger, log_extra

logger = get_logger(__name__)

SHOP_DOMAIN_SUFFIX = "myshopify.com"
ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


def shop_full_name(name: str) -> str:
    """
    Normalizes a shop name to its myshopify.com host.

    ``myshop``, ``myshop.myshopify.com`` and ``https://myshop.myshopify.com/``
    all become ``myshop.myshopify.com``.
    """
    name = name.strip()
    for scheme in ("https://", "http://"):
        if name.startswith(scheme):
            name = name[len(scheme):]
    name = name.strip("/").strip(".")
    if SHOP_DOMAIN_SUFFIX in name:
        return name
    return f"{name}.{SHOP_DOMAIN_SUFFIX}"


class ShopifyConnector(APIConnector):
    """
    Connector for the Shopify Admin REST API.

    Handles base URL construction, the access token header, JSON
    (de)serialization and error normalization. Every call is a single
    round trip; throttled or failed requests are reported, never retried.
    """

    def __init__(
        self,
        shop_name: str,
        access_token: str,
        api_version: str = "2024-01",
        timeout: float = 10,
        user_agent: str = "inventory-adaptor/0.1.0",
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize the Shopify connector.

        Args:
            shop_name: Shop name or myshopify.com domain
            access_token: Admin API access token
            api_version: API version to use (e.g., '2024-01')
            timeout: Request timeout in seconds
            user_agent: Value of the User-Agent header
            transport: Optional httpx transport, mainly for tests
        """
        self.shop_domain = shop_full_name(shop_name)
        self.api_version = api_version
        self.timeout = timeout
        self.base_url = f"https://{self.shop_domain}/admin/api/{self.api_version}/"

        self.http_client = httpx.Client(
            base_url=self.base_url,
            headers={
                ACCESS_TOKEN_HEADER: access_token,
                "Accept": "application/json",
                "User-Agent": user_agent,
            },
            timeout=timeout,
            transport=transport,
        )

        logger.info(f"Shopify connector initialized for {self.shop_domain} (API {self.api_version})")

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None
    ) -> "ShopifyConnector":
        """
        Build a connector from adaptor settings.

        Raises:
            ConfigurationError: If the shop name or access token is missing
        """
        settings = settings or get_settings()
        if not settings.SHOPIFY_SHOP_NAME or not settings.SHOPIFY_ACCESS_TOKEN:
            raise ConfigurationError(
                "Missing SHOPIFY_SHOP_NAME or SHOPIFY_ACCESS_TOKEN",
                context={
                    "shop_name_set": bool(settings.SHOPIFY_SHOP_NAME),
                    "access_token_set": bool(settings.SHOPIFY_ACCESS_TOKEN),
                }
            )
        return cls(
            shop_name=settings.SHOPIFY_SHOP_NAME,
            access_token=settings.SHOPIFY_ACCESS_TOKEN,
            api_version=settings.SHOPIFY_API_VERSION,
            timeout=settings.DEFAULT_TIMEOUT,
            user_agent=settings.USER_AGENT,
            transport=transport,
        )

    def build_url(self, path: str) -> str:
        return f"{self.base_url}{path.lstrip('/')}"

    def request(
        self,
        method: HttpMethod,
        path: str,
        resource_cls: Type[ResourceT],
        params: Optional[Dict[str, str]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ResourceT, httpx.Headers]:
        url = self.build_url(path)

        try:
            start_time = time.time()
            response = self.http_client.request(
                method.value,
                url,
                params=params or None,
                json=data,
            )
            duration = time.time() - start_time
        except httpx.TimeoutException as e:
            logger.error(f"Shopify API timeout: {method.value} {path}")
            raise IntegrationException(
                detail=f"Request timed out: {method.value} {path}",
                code="timeout_error",
                status_code=httpx.codes.GATEWAY_TIMEOUT,
                original_exception=e
            ) from e
        except httpx.TransportError as e:
            logger.error(f"Shopify API connection error: {str(e)}")
            raise IntegrationException(
                detail=f"Connection error: {str(e)}",
                original_exception=e
            ) from e

        logger.debug(
            f"Shopify API request completed in {duration:.2f}s",
            extra=log_extra(url=url, method=method.value, status_code=response.status_code)
        )

        if not response.is_success:
            raise self.handle_errors(response)

        return self._decode(response, resource_cls), response.headers

    def _decode(self, response: httpx.Response, resource_cls: Type[ResourceT]) -> ResourceT:
        """Decodes a successful response body into the envelope model."""
        try:
            # Parse floats as Decimal so money amounts never pass through binary floats
            payload = json.loads(response.content, parse_float=Decimal)
            return resource_cls.model_validate(payload)
        except (ValueError, ValidationError) as e:
            logger.error(
                f"Could not decode Shopify response into {resource_cls.__name__}",
                extra=log_extra(status_code=response.status_code)
            )
            raise ResponseDecodingError(
                detail=f"Could not decode response into {resource_cls.__name__}: {str(e)}",
                body=response.text,
                context={"upstream_status_code": response.status_code}
            ) from e

    def handle_errors(self, response: httpx.Response) -> ResponseError:
        """
        Maps a non-2xx response onto the exception taxonomy.

        Args:
            response: Response object from httpx

        Returns:
            ResponseError: The exception to raise for this response
        """
        errors = self._parse_error_response(response)
        message = ", ".join(errors) if errors else f"API error: {response.status_code}"
        status_code = response.status_code

        if status_code in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN):
            logger.error(f"Shopify authentication failed: {message}")
            return AuthenticationError(status_code=status_code, detail=message, errors=errors)

        if status_code == httpx.codes.NOT_FOUND:
            logger.warning(f"Shopify resource not found: {response.request.url.path}")
            return NotFoundError(detail=message, errors=errors)

        if status_code == httpx.codes.TOO_MANY_REQUESTS:
            retry_after = self._parse_retry_after(response)
            logger.warning(f"Shopify rate limit exceeded. Retry after {retry_after} seconds.")
            return RateLimitError(detail=message, retry_after=retry_after, errors=errors)

        logger.error(
            f"Shopify API error: {message}",
            extra=log_extra(status_code=status_code, errors=errors)
        )
        return ResponseError(status_code=status_code, detail=message, errors=errors)

    def _parse_error_response(self, response: httpx.Response) -> List[str]:
        """
        Flattens a Shopify error body into sorted messages.

        The platform answers with ``{"errors": "msg"}``, ``{"errors": ["msg"]}``,
        ``{"errors": {"field": ["msg"]}}`` or ``{"error": "msg"}``.
        """
        try:
            error_data = response.json()
        except ValueError:
            return [response.text] if response.text else []

        if not isinstance(error_data, dict):
            return []

        messages: List[str] = []
        if isinstance(error_data.get("error"), str) and error_data["error"]:
            messages.append(error_data["error"])

        errors: Union[str, List[Any], Dict[str, Any], None] = error_data.get("errors")
        if isinstance(errors, str):
            messages.append(errors)
        elif isinstance(errors, list):
            messages.extend(str(e) for e in errors)
        elif isinstance(errors, dict):
            for field, value in errors.items():
                if isinstance(value, list):
                    messages.extend(f"{field}: {v}" for v in value)
                else:
                    messages.append(f"{field}: {value}")

        return sorted(messages)

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> Optional[float]:
        retry_after = response.headers.get("Retry-After")
        if retry_after is None:
            return None
        try:
            return float(retry_after)
        except ValueError:
            return None

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.http_client.close()

    def __enter__(self) -> "ShopifyConnector":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
