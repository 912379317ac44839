# debtrust - http transport
# Copyright (C) 2025  Clyso GmbH
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

from __future__ import annotations

from types import TracebackType
from typing import Protocol

import httpx

from debtrust.errors import TransportError
from debtrust.logger import logger as root_logger

logger = root_logger.getChild("http")


class Fetcher(Protocol):
    async def fetch(self, url: str) -> bytes: ...


class Transport:
    """Fetch raw bytes over HTTP(S). Never retries."""

    _client: httpx.AsyncClient

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": "debtrust"},
            transport=transport,
        )

    async def __aenter__(self) -> Transport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self, url: str) -> bytes:
        """Obtain the exact contents at `url`."""
        logger.debug(f"fetching '{url}'")
        try:
            res = await self._client.get(url)
            _ = res.raise_for_status()
        except httpx.ConnectError as e:
            msg = f"error connecting to '{url}': {e}"
            logger.error(msg)
            raise TransportError(msg) from e
        except httpx.TimeoutException as e:
            msg = f"timed out fetching '{url}': {e}"
            logger.error(msg)
            raise TransportError(msg) from e
        except httpx.HTTPStatusError as e:
            msg = f"error fetching '{url}': status {e.response.status_code}"
            logger.error(msg)
            raise TransportError(msg) from e
        except httpx.HTTPError as e:
            msg = f"error fetching '{url}': {e}"
            logger.error(msg)
            raise TransportError(msg) from e

        logger.debug(f"fetched {len(res.content)} bytes from '{url}'")
        return res.content
