"""Unit tests for the fixed-delay throttle."""

from unittest.mock import AsyncMock, patch

import pytest

from livecheck.config import SuiteConfig
from livecheck.throttle import Throttle


def _make_throttle(**overrides) -> Throttle:
    """Create a Throttle with optional config overrides."""
    return Throttle(SuiteConfig(**overrides))


class TestPause:

    @pytest.mark.asyncio
    @patch("livecheck.throttle.asyncio.sleep", new_callable=AsyncMock)
    async def test_pause_sleeps_configured_delay(self, mock_sleep):
        throttle = _make_throttle(inter_test_delay=2.0)
        await throttle.pause()
        mock_sleep.assert_awaited_once_with(2.0)

    @pytest.mark.asyncio
    @patch("livecheck.throttle.asyncio.sleep", new_callable=AsyncMock)
    async def test_every_pause_sleeps_full_delay(self, mock_sleep):
        throttle = _make_throttle(inter_test_delay=2.0)
        await throttle.pause()
        await throttle.pause()
        assert [c.args[0] for c in mock_sleep.await_args_list] == [2.0, 2.0]
        assert throttle.stats["pauses"] == 2

    @pytest.mark.asyncio
    @patch("livecheck.throttle.asyncio.sleep", new_callable=AsyncMock)
    async def test_zero_delay_does_not_sleep(self, mock_sleep):
        throttle = _make_throttle(inter_test_delay=0.0)
        assert await throttle.pause() == 0.0
        mock_sleep.assert_not_awaited()
        assert throttle.stats["pauses"] == 0

    @pytest.mark.asyncio
    async def test_real_sleep_measured(self):
        throttle = _make_throttle(inter_test_delay=0.01)
        slept = await throttle.pause("test")
        assert slept > 0.0
        assert throttle.stats["total_slept"] == pytest.approx(slept)


class TestDefaults:

    def test_default_delay_is_two_seconds(self):
        assert Throttle().delay == 2.0
