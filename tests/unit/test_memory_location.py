"""Unit tests for the in-memory location provider."""

import pytest

from src.infrastructure.location import MemoryLocationProvider


class TestMemoryLocationProvider:
    """Tests for URL changes and queued navigation events."""

    def test_initial_state(self):
        location = MemoryLocationProvider("p.html", script_urls=["a.js", "b.js"])

        assert location.current_url() == "p.html"
        assert location.script_urls() == ["a.js", "b.js"]
        assert location.history == ["p.html"]
        assert location.pending_events == 0

    def test_set_url_queues_one_event(self):
        location = MemoryLocationProvider("p.html")

        location.set_url("p.html#year=2020")

        assert location.current_url() == "p.html#year=2020"
        assert location.pending_events == 1

    def test_same_url_is_not_a_change(self):
        location = MemoryLocationProvider("p.html")

        location.navigate("p.html")

        assert location.pending_events == 0
        assert location.history == ["p.html"]

    def test_back(self):
        location = MemoryLocationProvider("p.html")
        location.navigate("p.html#a")

        assert location.back()
        assert location.current_url() == "p.html"
        assert not location.back()

    @pytest.mark.asyncio
    async def test_callbacks_see_url_at_delivery_time(self):
        location = MemoryLocationProvider("p.html")
        seen = []

        async def callback():
            seen.append(location.current_url())

        location.on_navigate(callback)
        location.set_url("p.html#1")
        location.set_url("p.html#2")

        delivered = await location.dispatch_pending()

        assert delivered == 2
        assert seen == ["p.html#2", "p.html#2"]
        assert location.pending_events == 0

    @pytest.mark.asyncio
    async def test_events_queued_during_dispatch_are_delivered(self):
        location = MemoryLocationProvider("p.html")
        seen = []

        async def callback():
            seen.append(location.current_url())
            if location.current_url() == "p.html#1":
                location.set_url("p.html#2")

        location.on_navigate(callback)
        location.set_url("p.html#1")

        assert await location.dispatch_pending() == 2
        assert seen == ["p.html#1", "p.html#2"]

    @pytest.mark.asyncio
    async def test_dispatch_without_events(self):
        location = MemoryLocationProvider()
        assert await location.dispatch_pending() == 0
