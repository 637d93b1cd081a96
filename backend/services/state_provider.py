"""HTTP client for the lexicon simulation's state endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class SnapshotFetchError(Exception):
    """The state endpoint could not be reached or returned an unusable body."""

    pass


class StateProvider:
    """HTTP client for GET {base_url}/api/state.

    One request per call, bounded by a timeout. No retries: a failed fetch is
    a failed build.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def state_url(self) -> str:
        return f"{self._base_url}/api/state"

    async def fetch_state(self) -> dict[str, Any]:
        """
        Fetch the raw snapshot document.

        Returns:
            Decoded JSON object from the state endpoint

        Raises:
            SnapshotFetchError: On network errors, timeouts, non-2xx statuses,
                malformed JSON, or a body that is not a JSON object
        """
        logger.info("Fetching lexicon state from %s", self.state_url)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self.state_url)
                response.raise_for_status()
                body = response.json()
        except httpx.TimeoutException as e:
            raise SnapshotFetchError(f"Timed out after {self._timeout}s fetching {self.state_url}") from e
        except httpx.HTTPStatusError as e:
            raise SnapshotFetchError(
                f"State endpoint returned HTTP {e.response.status_code}: {self.state_url}"
            ) from e
        except httpx.HTTPError as e:
            raise SnapshotFetchError(f"Could not reach {self.state_url}: {e}") from e
        except ValueError as e:
            raise SnapshotFetchError(f"State endpoint returned malformed JSON: {e}") from e

        if not isinstance(body, dict):
            raise SnapshotFetchError(f"State endpoint returned {type(body).__name__}, expected an object")
        return body
