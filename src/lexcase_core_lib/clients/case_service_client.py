"""HTTP client for the case service."""

from typing import Optional

import httpx

from lexcase_core_lib.clients.base import BaseServiceClient
from lexcase_core_lib.models import CaseState


class CaseServiceClient(BaseServiceClient):
    """Async HTTP client for reading case snapshots from the case service.

    The case service owns persistence; this client only reads the
    `CaseState` snapshot the transition engine validates against.

    Usage:
        client = CaseServiceClient(base_url="http://lexcase-case-service:8000")
        state = await client.get_case_state(case_id="case-123", user_id="user-456")
        result = validator.validate(state, Phase.FORMAL_PROCEEDINGS, Role.ATTORNEY)
    """

    def __init__(
        self,
        base_url: str = "http://lexcase-case-service:8000",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize client.

        Args:
            base_url: Base URL of the case service
            timeout: Request timeout in seconds (default: 30.0)
            transport: Optional httpx transport
        """
        super().__init__(base_url=base_url, timeout=timeout, transport=transport)

    async def get_case_state(
        self, case_id: str, user_id: str, correlation_id: Optional[str] = None
    ) -> CaseState:
        """Get the lifecycle snapshot of a case.

        Args:
            case_id: Case identifier
            user_id: User ID for X-User-ID header
            correlation_id: Optional correlation ID for request tracing

        Returns:
            CaseState snapshot

        Raises:
            httpx.HTTPStatusError: If case not found or other HTTP error
        """
        async with self._get_client() as client:
            response = await client.get(
                f"{self.base_url}/api/v1/cases/{case_id}/state",
                headers=self._headers(user_id=user_id, correlation_id=correlation_id),
            )
            response.raise_for_status()
            return CaseState(**response.json())
