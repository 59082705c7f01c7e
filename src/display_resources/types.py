"""Core types for display resource resolution."""

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    """A cached value with its lifetime."""

    key: str
    value: T
    created_at: int  # Clock time ms
    expires_at: int  # created_at + ttl

    def is_expired(self, now: int) -> bool:
        """Check if the entry has outlived its TTL at ``now``."""
        return now > self.expires_at


class Fetcher(Protocol[T_co]):
    """Zero-argument supplier invoked by the cache on a miss."""

    def __call__(self) -> T_co: ...


@runtime_checkable
class DisplaySource(Protocol):
    """A display model that knows the file it was loaded from."""

    @property
    def input_file(self) -> str | None:
        """Path or URL of the display, if known."""
        ...


# Duration type alias
Duration = str | int | float  # "30s", "1.5m", "250ms" or milliseconds
