"""HTTP transport for JSON GET requests."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyeventmap._constants import USER_AGENT
from pyeventmap._redact import redact_params
from pyeventmap.exceptions import EventMapTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str, params: Mapping[str, str]) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed transport that returns decoded JSON bodies."""

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        request_timeout: float | None = None,
    ) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=request_timeout) if request_timeout is not None else None

    async def get_json(self, url: str, params: Mapping[str, str]) -> Any:
        """Issue one GET and decode the JSON body.

        Raises
        ------
        EventMapTransportError
            On network failure, timeout, a non-2xx status, or a body
            that is not JSON.
        """
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s params=%s", url, redact_params(params))

        kwargs: dict[str, Any] = {"params": dict(params), "headers": headers}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            async with self._http.get(url, **kwargs) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise EventMapTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except EventMapTransportError:
            raise
        except TimeoutError as exc:
            raise EventMapTransportError(f"Request to {url} timed out", endpoint=url) from exc
        except aiohttp.ClientError as exc:
            raise EventMapTransportError(f"Request to {url} failed: {exc}", endpoint=url) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise EventMapTransportError(
                f"Invalid JSON from {url}: {text[:200]}",
                status_code=resp.status,
                endpoint=url,
            ) from exc
