"""Shared pytest fixtures."""

import pytest

from display_resources import ContentCache, ResolverSettings, ResourceResolver


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    """Create a fresh FakeClock for each test."""
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ContentCache[bytes]:
    """Create a ContentCache with a 10s TTL on the fake clock."""
    return ContentCache("10s", clock=clock)


@pytest.fixture
def resolver(cache: ContentCache[bytes]):
    """Create a ResourceResolver backed by the fake-clock cache."""
    settings = ResolverSettings(cache_ttl="10s", read_timeout=2_000)
    with ResourceResolver(settings, cache=cache) as resolver:
        yield resolver
