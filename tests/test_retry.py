import asyncio
from unittest.mock import AsyncMock

import pytest

from studybot.utils.retry import retry


def test_retry_returns_after_transient_failures():
    func = AsyncMock(side_effect=[ConnectionError(), ConnectionError(), "ok"])
    result = asyncio.run(retry(func, "a", attempts=3, base_delay=0, key="v"))
    assert result == "ok"
    assert func.await_count == 3
    func.assert_awaited_with("a", key="v")


def test_retry_reraises_last_error():
    func = AsyncMock(side_effect=ConnectionError("down"))
    with pytest.raises(ConnectionError, match="down"):
        asyncio.run(retry(func, attempts=2, base_delay=0))
    assert func.await_count == 2


def test_retry_ignores_unlisted_exceptions():
    func = AsyncMock(side_effect=KeyError("x"))
    with pytest.raises(KeyError):
        asyncio.run(retry(func, attempts=5, base_delay=0, exceptions=(ConnectionError,)))
    assert func.await_count == 1
