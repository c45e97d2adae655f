"""Checker service - performs HTTP and TCP health checks."""
import asyncio
import logging
from typing import Optional

import httpx

from ..config import settings
from ..schemas import HttpCheck, TcpCheck, Target

logger = logging.getLogger(__name__)


def tcp_address(host: str, port: int) -> str:
    """Build a host:port authority, bracketing IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class CheckerService:
    """Runs a single health check against a target.

    Every failure mode (DNS, refused connection, TLS, timeout, bad HTTP status)
    is reported as an unhealthy result; `check` never raises.
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.user_agent = user_agent or settings.user_agent
        # Tests swap in httpx.MockTransport here
        self._transport = transport

    async def check(self, target: Target, timeout: float) -> bool:
        """Return True if the target is healthy."""
        match target.check:
            case HttpCheck(url=url):
                return await self._check_http(target.name, url, timeout)
            case TcpCheck(host=host, port=port):
                return await self._check_tcp(target.name, host, port, timeout)
        logger.warning(f"Unsupported check for {target.name}: {target.check!r}")
        return False

    async def _check_http(self, name: str, url: str, timeout: float) -> bool:
        """GET the URL; healthy iff the status code is 2xx or 3xx."""
        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                # httpx times each phase separately; bound the whole request
                response = await asyncio.wait_for(client.get(url), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.debug(f"{name}: request timeout")
            return False
        except httpx.HTTPError as e:
            logger.debug(f"{name}: HTTP error: {e!r}")
            return False
        except Exception as e:
            logger.debug(f"{name}: check failed: {e!r}")
            return False

        healthy = 200 <= response.status_code < 400
        if not healthy:
            logger.debug(f"{name}: HTTP {response.status_code}")
        return healthy

    async def _check_tcp(self, name: str, host: str, port: int, timeout: float) -> bool:
        """Open a stream connection; healthy iff it completes within the timeout."""
        address = tcp_address(host, port)
        try:
            # address is for logs; open_connection takes host and port apart
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            logger.debug(f"{name}: connect to {address} timed out")
            return False
        except (OSError, ValueError) as e:
            logger.debug(f"{name}: connect to {address} failed: {e}")
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True


# Global instance
checker_service = CheckerService()
