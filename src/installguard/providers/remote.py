"""Remote script provider backed by ``httpx``.

Fetches installation scripts over HTTP(S), e.g. the published copy of an
installer, so it can be evaluated before anyone pipes it into a shell.
Requires the optional ``remote`` extra.
"""

from __future__ import annotations

import logging
from typing import Any

from installguard.exceptions import ScriptReadError
from installguard.providers.base import ScriptProvider

logger = logging.getLogger(__name__)

# Timeout for remote script requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = "InstallGuard-ScriptFetcher/0.1"


def _ensure_httpx() -> Any:  # noqa: ANN401
    """Lazily import httpx and raise a friendly error if missing.

    Returns:
        The ``httpx`` module.

    Raises:
        SystemExit: If httpx is not installed.
    """
    try:
        import httpx

        return httpx
    except ImportError:
        raise SystemExit(
            "httpx is required for remote script evaluation.\n"
            "Install it with: pip install installguard[remote]"
        )


class HttpScriptProvider(ScriptProvider):
    """Fetch scripts by URL.

    Identifiers are absolute URLs, or paths joined onto ``base_url`` when
    one is given.

    Args:
        base_url: Optional prefix for relative identifiers.
        timeout: Request timeout in seconds.
        transport: Optional ``httpx`` transport (e.g. ``httpx.MockTransport``).

    Raises:
        SystemExit: At construction, if httpx is not installed. ``read()``
            itself only ever raises ``ScriptReadError``.
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Any = None,  # noqa: ANN401
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._httpx = _ensure_httpx()

    def url_for(self, script_id: str) -> str:
        if "://" in script_id or not self.base_url:
            return script_id
        return f"{self.base_url}/{script_id.lstrip('/')}"

    async def read(self, script_id: str) -> str:
        httpx = self._httpx
        url = self.url_for(script_id)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp.text
        except httpx.TimeoutException as exc:
            logger.warning("Timeout fetching %s", url)
            raise ScriptReadError(script_id, "request timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning("HTTP %d from %s", exc.response.status_code, url)
            raise ScriptReadError(
                script_id, f"HTTP {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("Request error for %s: %s", url, exc)
            raise ScriptReadError(script_id, str(exc)) from exc
