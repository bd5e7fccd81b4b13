"""HTTP client for the rule configuration service."""

import logging
from typing import Callable, Optional

import httpx

from lexcase_core_lib.clients.base import BaseServiceClient
from lexcase_core_lib.lifecycle.exceptions import RuleConfigurationError
from lexcase_core_lib.lifecycle.loader import load_rule_set
from lexcase_core_lib.models.rules import RuleSet
from lexcase_core_lib.utils.resilience import service_startup_retry

logger = logging.getLogger(__name__)


class RuleConfigClient(BaseServiceClient):
    """Async HTTP client that fetches rule sets at startup.

    Transient HTTP failures are retried with the startup retry policy;
    a payload that fails validation raises `RuleConfigurationError` at once.

    Usage:
        client = RuleConfigClient(base_url="http://lexcase-rules-service:8000")
        rule_set = await client.fetch_rule_set("default")
    """

    def __init__(
        self,
        base_url: str = "http://lexcase-rules-service:8000",
        timeout: float = 30.0,
        retry_policy: Optional[Callable] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize client.

        Args:
            base_url: Base URL of the rule configuration service
            timeout: Request timeout in seconds (default: 30.0)
            retry_policy: Retry decorator (default: service_startup_retry)
            transport: Optional httpx transport
        """
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)
        self.retry_policy = retry_policy or service_startup_retry

    async def fetch_rule_set(
        self, name: str = "default", correlation_id: Optional[str] = None
    ) -> RuleSet:
        """Fetch and validate a rule set.

        Args:
            name: Rule set name
            correlation_id: Optional correlation ID for request tracing

        Returns:
            Validated RuleSet

        Raises:
            httpx.HTTPError: If the service is unreachable after all retries
            RuleConfigurationError: If the payload is not a valid rule set
        """
        return await self.retry_policy(self._fetch_rule_set)(name, correlation_id)

    async def _fetch_rule_set(self, name: str, correlation_id: Optional[str]) -> RuleSet:
        async with self._get_client() as client:
            response = await client.get(
                f"{self.base_url}/api/v1/rule-sets/{name}",
                headers=self._headers(correlation_id=correlation_id),
            )
            response.raise_for_status()
            try:
                payload = response.json()
            except ValueError as e:
                raise RuleConfigurationError(f"Rule set '{name}' response is not JSON") from e

        if not isinstance(payload, dict):
            raise RuleConfigurationError(f"Rule set '{name}' response must be a JSON object")
        logger.info(f"Fetched rule set '{name}' from {self.base_url}")
        return load_rule_set(payload)
