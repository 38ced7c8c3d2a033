import asyncio
import logging

import pytest
from sqlalchemy.exc import OperationalError

from core.errors import Forbidden, Internal
from core.friendly_msg import get_friendly_message
from core.safe_handler import safe_handler
from core.settings import Settings


def test_allowed_hosts_keep_only_http_urls():
    raw = "http://localhost:3000, https://homefinder.example.com ,ftp://nope,, junk"

    assert Settings(ALLOWED_HOSTS_RAW=raw).ALLOWED_HOSTS == [
        "http://localhost:3000",
        "https://homefinder.example.com",
    ]


def test_allowed_hosts_warns_when_nothing_is_valid(caplog):
    with caplog.at_level(logging.WARNING):
        assert Settings(ALLOWED_HOSTS_RAW="localhost").ALLOWED_HOSTS == []

    assert "No valid URLs found in ALLOWED_HOSTS" in caplog.text


def test_friendly_message_hides_internal_details():
    error = OperationalError("SELECT 1", {}, Exception("password=hunter2"))

    message = get_friendly_message(error)

    assert message == "Unable to reach the database. Please try again shortly."
    assert "hunter2" not in message


def test_safe_handler_passes_domain_errors_through():
    @safe_handler
    async def endpoint():
        raise Forbidden("Forbidden: nope")

    with pytest.raises(Forbidden):
        asyncio.run(endpoint())


def test_safe_handler_turns_unexpected_errors_into_internal():
    @safe_handler
    async def endpoint():
        raise ConnectionError("redis://secret-host refused")

    with pytest.raises(Internal) as exc:
        asyncio.run(endpoint())

    assert exc.value.status_code == 500
    assert "secret-host" not in exc.value.detail


def test_request_log_line_is_truncated(client, caplog):
    long_path = "/api/properties/" + "x" * 120

    with caplog.at_level(logging.INFO, logger="core.catch_error_middleware"):
        client.get(long_path)

    lines = [
        r.getMessage()
        for r in caplog.records
        if r.name == "core.catch_error_middleware"
    ]
    assert lines
    assert all(len(line) <= 80 for line in lines)
    assert lines[-1].endswith("…")
