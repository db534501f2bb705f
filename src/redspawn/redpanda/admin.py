"""Client for the Redpanda Admin API."""

import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, StrictBool

from redspawn.errors import AdminAPIError
from redspawn.redpanda.constants import HEALTH_OVERVIEW_PATH, SCRAM_SHA_256, USERS_PATH


logger = logging.getLogger(__name__)


class ClusterHealthOverview(BaseModel):
    """Response of GET /v1/cluster/health_overview."""
    model_config = ConfigDict(extra="ignore")

    # Only a JSON true counts, "true" or 1 must not pass as healthy
    is_healthy: StrictBool
    controller_id: Optional[int] = None
    all_nodes: List[int] = Field(default_factory=list)
    nodes_down: List[int] = Field(default_factory=list)
    leaderless_partitions: List[str] = Field(default_factory=list)


class AdminAPIClient:
    """Minimal async client for the Redpanda Admin API."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        """Initialize admin client for an http://host:port base URL."""
        self.base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "AdminAPIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def health_overview(self) -> ClusterHealthOverview:
        """Fetch the cluster health overview.

        Raises httpx errors and pydantic ValidationError unchanged, callers
        polling for readiness treat them as "not ready yet".
        """
        response = await self._client.get(HEALTH_OVERVIEW_PATH)
        response.raise_for_status()
        return ClusterHealthOverview.model_validate_json(response.content)

    async def create_user(self, username: str, password: str, mechanism: str = SCRAM_SHA_256) -> None:
        """Create a SASL/SCRAM user."""
        payload = {
            "username": username,
            "password": password,
            "algorithm": mechanism,
        }

        try:
            response = await self._client.post(USERS_PATH, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AdminAPIError(
                f"HTTP error {e.response.status_code}: {e.response.text}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise AdminAPIError(f"Connection error: {e}") from e

        logger.debug(f"Created user {username} with {mechanism}")
