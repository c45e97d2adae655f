"""Tests for the HTTP and TCP checks."""
import asyncio
import socket
import time

import httpx
import pytest

from benchmarker.services.checker import CheckerService, tcp_address
from tests.conftest import http_target, tcp_target


def checker_returning(status_code: int) -> CheckerService:
    return CheckerService(transport=httpx.MockTransport(lambda request: httpx.Response(status_code)))


def test_tcp_address_brackets_ipv6_literal():
    assert tcp_address("::1", 8080) == "[::1]:8080"


def test_tcp_address_plain_host():
    assert tcp_address("db.internal", 5432) == "db.internal:5432"
    assert tcp_address("10.0.0.7", 22) == "10.0.0.7:22"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, healthy",
    [(200, True), (204, True), (399, True), (400, False), (199, False), (503, False)],
)
async def test_http_status_ranges(status_code, healthy):
    checker = checker_returning(status_code)
    assert await checker.check(http_target("web"), timeout=1) is healthy


@pytest.mark.asyncio
async def test_http_connection_refused_is_unhealthy():
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    checker = CheckerService(transport=httpx.MockTransport(refuse))
    assert await checker.check(http_target("web"), timeout=1) is False


@pytest.mark.asyncio
async def test_http_timeout_is_unhealthy():
    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    checker = CheckerService(transport=httpx.MockTransport(slow))
    assert await checker.check(http_target("web"), timeout=1) is False


@pytest.mark.asyncio
async def test_http_sends_user_agent():
    seen = {}

    def handler(request):
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200)

    checker = CheckerService(user_agent="bench-test/1.0", transport=httpx.MockTransport(handler))
    assert await checker.check(http_target("web"), timeout=1) is True
    assert seen["ua"] == "bench-test/1.0"


@pytest.mark.asyncio
async def test_http_invalid_url_is_unhealthy():
    checker = CheckerService()
    assert await checker.check(http_target("web", url="not a url"), timeout=1) is False


@pytest.mark.asyncio
async def test_tcp_open_port_is_healthy():
    server = await asyncio.start_server(lambda r, w: w.close(), "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        checker = CheckerService()
        assert await checker.check(tcp_target("db", port=port), timeout=1) is True
    finally:
        server.close()
        await server.wait_closed()


@pytest.mark.asyncio
async def test_tcp_closed_port_is_unhealthy():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    checker = CheckerService()
    assert await checker.check(tcp_target("db", port=port), timeout=1) is False


@pytest.mark.asyncio
async def test_tcp_timeout_is_unhealthy(monkeypatch):
    async def hang(host, port):
        await asyncio.sleep(10)

    monkeypatch.setattr(asyncio, "open_connection", hang)
    checker = CheckerService()
    assert await checker.check(tcp_target("db"), timeout=0.05) is False


async def trickle_body(reader, writer):
    """Send headers at once, then the body one byte at a time."""
    await reader.readuntil(b"\r\n\r\n")
    writer.write(b"HTTP/1.1 200 OK\r\nContent-Length: 20\r\n\r\n")
    try:
        for _ in range(20):
            if writer.is_closing():
                break
            writer.write(b"x")
            await writer.drain()
            await asyncio.sleep(0.3)
    except ConnectionError:
        pass
    finally:
        writer.close()


@pytest.mark.asyncio
async def test_http_slow_body_is_bounded_by_timeout():
    server = await asyncio.start_server(trickle_body, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        checker = CheckerService()
        started = time.monotonic()
        healthy = await checker.check(http_target("web", url=f"http://127.0.0.1:{port}/"), timeout=0.5)
        elapsed = time.monotonic() - started
    finally:
        server.close()

    assert healthy is False
    assert elapsed < 1.5
