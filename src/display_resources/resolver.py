"""Resource resolution relative to a parent display.

Resolving a name tries candidates by actually opening them. For URLs
that means a network read, so every URL open goes through the content
cache: the check pays for the read, and the real open that usually
follows within the TTL is served from memory.
"""

from __future__ import annotations

import io
import os
import threading
from functools import partial
from types import TracebackType
from typing import IO, BinaryIO

import structlog

from display_resources.cache import ContentCache
from display_resources.exceptions import ResourceError
from display_resources.fetch import UrlReader
from display_resources.paths import (
    combine_display_paths,
    has_scheme,
    is_url,
    replace_extension,
    strip_file_scheme,
)
from display_resources.settings import ResolverSettings
from display_resources.types import DisplaySource

logger = structlog.get_logger(__name__)

COPY_CHUNK_SIZE = 4096


class ResourceResolver:
    """Locates display resources: files, web links.

    Thread-safe. ``resolve`` and the ``open_*`` methods may block for up
    to the configured read timeout while a URL is fetched.
    """

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        *,
        cache: ContentCache[bytes] | None = None,
        reader: UrlReader | None = None,
    ) -> None:
        """Create a resolver.

        Args:
            settings: Configuration, defaults to ``ResolverSettings()``
            cache: Cache for URL content, built from settings if omitted
            reader: Performs network reads, built from settings if omitted
        """
        if settings is None:
            settings = ResolverSettings()
        self.settings = settings
        if cache is None:
            cache = ContentCache(
                self.settings.cache_ttl, single_flight=self.settings.single_flight
            )
        if reader is None:
            reader = UrlReader(
                self.settings.read_timeout,
                trust_self_signed=self.settings.trust_self_signed,
                user_agent=self.settings.user_agent,
            )
        self._cache: ContentCache[bytes] = cache
        self._reader = reader

    @property
    def cache(self) -> ContentCache[bytes]:
        """Cache holding URL content read by this resolver."""
        return self._cache

    def resolve(self, parent: str | None, name: str) -> str:
        """Attempt to resolve a resource relative to a parent display.

        For legacy display files, an updated sibling with the current
        extension is preferred when it exists.

        Args:
            parent: Path or URL of the 'parent' file, may be None
            name: Resource path; if relative, it is taken relative to parent

        Returns:
            Resolved name. The original name if nothing could be found.
        """
        logger.debug("Resolving resource", name=name, parent=parent)
        name = strip_file_scheme(name)

        updated = replace_extension(
            name, self.settings.legacy_extension, self.settings.file_extension
        )
        if updated is not None:
            found = self.do_resolve(parent, updated)
            if found is not None:
                logger.debug("Using updated resource", resolved=found, legacy=name)
                return found

        found = self.do_resolve(parent, name)
        if found is not None:
            return found

        logger.debug("Resource not resolved", name=name, parent=parent)
        return name

    def resolve_for_display(self, display: DisplaySource, name: str) -> str:
        """Resolve name relative to the file a display was loaded from."""
        return self.resolve(display.input_file, name)

    def do_resolve(self, parent: str | None, name: str) -> str | None:
        """Try the candidates for name, first hit wins.

        Order: name as URL, parent-relative URL, name as file,
        parent-relative file.

        Returns:
            The resolved name, or None
        """
        if self.can_open_url(name):
            logger.debug("Using URL", url=name)
            return name

        combined = combine_display_paths(parent, name)
        if self.can_open_url(combined):
            logger.debug("Using URL", url=combined)
            return combined

        for candidate in (name, combined):
            if os.path.exists(candidate):
                path = os.path.abspath(candidate)
                logger.debug("Found file", path=path)
                return path

        return None

    def can_open_url(self, name: str) -> bool:
        """Check that name is a URL which can actually be opened.

        The content read here stays in the cache, so the caller's
        follow-up open of the same URL does not hit the network again.
        """
        if not is_url(name):
            return False
        try:
            with self.open_url(name):
                return True
        except (ResourceError, OSError) as e:
            logger.debug("URL not readable", url=name, error=str(e))
            return False

    def open_resource_stream(self, name: str) -> BinaryIO:
        """Open a file or web location for reading.

        Names with a URL scheme (``http://``, ``https://``, ``ftp://``, ...)
        go through the cache; anything else is opened as a local file.

        Raises:
            ResourceError: If a URL cannot be read
            OSError: If a file cannot be opened
        """
        if has_scheme(name):
            return self.open_url(name)
        return open(name, "rb")  # noqa: SIM115

    def open_url(self, name: str) -> BinaryIO:
        """Open a URL, serving its content from the cache when fresh.

        Returns:
            In-memory stream over the content
        """
        content = self._cache.get_or_fetch(name, partial(self.read_url, name))
        return io.BytesIO(content)

    def read_url(self, name: str) -> bytes:
        """Read a URL from the network, bypassing the cache."""
        return self._reader.read(name)

    def write_resource(self, name: str) -> BinaryIO:
        """Open a file resource for writing."""
        return open(name, "wb")  # noqa: SIM115

    def close(self) -> None:
        """Release the HTTP clients of the URL reader."""
        self._reader.close()

    def __enter__(self) -> ResourceResolver:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def copy_resource(
    source: IO[bytes],
    target: IO[bytes],
    chunk_size: int = COPY_CHUNK_SIZE,
) -> None:
    """Copy source to target, then close both.

    Both streams are closed even when the copy fails. Errors while
    closing are logged, never raised, so a copy failure is what the
    caller sees.
    """
    try:
        while chunk := source.read(chunk_size):
            target.write(chunk)
    finally:
        _close_quietly(source, "input")
        _close_quietly(target, "output")


def _close_quietly(stream: IO[bytes], role: str) -> None:
    try:
        stream.close()
    except OSError as e:
        logger.warning("Error closing stream", role=role, error=str(e), exc_info=True)


_default_resolver: ResourceResolver | None = None
_default_lock = threading.Lock()


def get_default_resolver() -> ResourceResolver:
    """Return a shared resolver configured from the environment."""
    global _default_resolver
    with _default_lock:
        if _default_resolver is None:
            _default_resolver = ResourceResolver(ResolverSettings.from_env())
        return _default_resolver
