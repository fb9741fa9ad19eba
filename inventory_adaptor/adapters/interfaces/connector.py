from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel

# Envelope model a response body is decoded into
ResourceT = TypeVar("ResourceT", bound=BaseModel)


class HttpMethod(str, Enum):
    """Enum defining the HTTP methods resource bindings issue."""
    GET = "GET"
    PUT = "PUT"


class APIConnector(ABC):
    """
    Abstract base interface for API connectors.

    A connector is the shared client every resource binding calls through.
    It owns the base URL, authentication headers, serialization and the
    mapping of failures onto the exception taxonomy in
    ``inventory_adaptor.core.exceptions``. Bindings only build paths and
    pick envelope models.
    """

    @abstractmethod
    def request(
        self,
        method: HttpMethod,
        path: str,
        resource_cls: Type[ResourceT],
        params: Optional[Dict[str, str]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Tuple[ResourceT, httpx.Headers]:
        """
        Makes one HTTP request and decodes the body into ``resource_cls``.

        Args:
            method: HTTP method to use
            path: Path relative to the API base URL
            resource_cls: Envelope model to decode the body into
            params: Optional query parameters
            data: Optional JSON request body

        Returns:
            Tuple[ResourceT, httpx.Headers]: Decoded body and response headers

        Raises:
            IntegrationException: If no response was received
            ResponseError: If the API answered with a non-2xx status
            ResponseDecodingError: If the body does not match ``resource_cls``
        """

    def get(
        self,
        path: str,
        resource_cls: Type[ResourceT],
        params: Optional[Dict[str, str]] = None,
    ) -> ResourceT:
        """Performs a GET and returns the decoded body."""
        resource, _ = self.request(HttpMethod.GET, path, resource_cls, params=params)
        return resource

    def get_with_headers(
        self,
        path: str,
        resource_cls: Type[ResourceT],
        params: Optional[Dict[str, str]] = None,
    ) -> Tuple[ResourceT, httpx.Headers]:
        """Performs a GET and returns the decoded body with the response headers."""
        return self.request(HttpMethod.GET, path, resource_cls, params=params)

    def put(
        self,
        path: str,
        data: Dict[str, Any],
        resource_cls: Type[ResourceT],
    ) -> ResourceT:
        """Performs a PUT with a JSON body and returns the decoded body."""
        resource, _ = self.request(HttpMethod.PUT, path, resource_cls, data=data)
        return resource

    @abstractmethod
    def build_url(self, path: str) -> str:
        """
        Builds a complete URL from a resource path.

        Args:
            path: The path to the specific resource

        Returns:
            str: The complete URL
        """
