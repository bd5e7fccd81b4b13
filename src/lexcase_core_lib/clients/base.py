"""Base service client for internal service-to-service calls."""

import json
import logging
from typing import List, Optional

import httpx

logger = logging.getLogger(__name__)


class BaseServiceClient:
    """Base class for internal service-to-service HTTP clients.

    Services call each other directly without JWT authentication.
    User context is propagated via X-User-* headers.

    Usage:
        class RuleConfigClient(BaseServiceClient):
            async def fetch_rule_set(self, name: str) -> RuleSet:
                async with self._get_client() as client:
                    response = await client.get(
                        f"{self.base_url}/api/v1/rule-sets/{name}",
                        headers=self._headers(),
                    )
                    response.raise_for_status()
                    return load_rule_set(response.json())
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize service client.

        Args:
            base_url: Service base URL (e.g., http://lexcase-rules-service:8000)
            timeout: Request timeout in seconds (default: 30.0)
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

        logger.info(f"Initialized {self.__class__.__name__} with base_url={base_url}")

    def _headers(
        self,
        user_id: Optional[str] = None,
        user_roles: Optional[List[str]] = None,
        correlation_id: Optional[str] = None,
    ) -> dict:
        """Generate request headers with user context.

        Args:
            user_id: User ID for X-User-ID header
            user_roles: User roles for X-User-Roles header
            correlation_id: Optional correlation ID for request tracing

        Returns:
            Headers dict with X-User-* headers and correlation ID
        """
        headers = {
            "Content-Type": "application/json",
        }

        if user_id:
            headers["X-User-ID"] = user_id

        if user_roles:
            headers["X-User-Roles"] = json.dumps(user_roles)

        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id

        return headers

    def _get_client(self) -> httpx.AsyncClient:
        """Get HTTP client instance with configured timeout.

        Returns:
            Configured AsyncClient ready for use with async context manager
        """
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)
