"""Identifier sources for the pool benchmark.

This module provides the IdentifierSource capability and its two variants: a
direct source that generates every identifier on demand, and a pooled source
that dispenses pre-generated identifiers and regenerates the whole pool when
it runs dry.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from threading import Event, Lock, Thread
from typing import TYPE_CHECKING

from .errors import GenerationFailure
from .logger import logger
from .models import RefillPolicy, require_positive_int

if TYPE_CHECKING:
    from collections.abc import Callable


def uuid4_string() -> str:
    """Generate a random RFC 4122 identifier as text."""
    return str(uuid.uuid4())


class IdentifierSource(ABC):
    """Produces a unique textual identifier on each call to ``next``."""

    name: str = "Identifier Source"

    def __init__(self, generator: Callable[[], str] | None = None) -> None:
        """Initialise the source with the generator that creates fresh identifiers.

        Args:
            generator: Zero-argument callable returning a new identifier.
                Defaults to random UUIDs.
        """
        self.generator = generator or uuid4_string

    def generate(self) -> str:
        """Create one fresh identifier.

        Returns:
            The generated identifier.

        Raises:
            GenerationFailure: If the underlying generator fails.
        """
        try:
            return self.generator()
        except Exception as e:
            msg = f"Identifier generation failed: {e}"
            raise GenerationFailure(msg) from e

    @abstractmethod
    def next(self) -> str:
        """Return an identifier not previously returned by this source."""


class DirectIdentifierSource(IdentifierSource):
    """Generates every identifier synchronously on demand."""

    name = "Direct ID Generation"

    def next(self) -> str:
        return self.generate()


class PooledIdentifierSource(IdentifierSource):
    """Dispenses identifiers from a pre-generated pool.

    The pool is filled once on construction. When a call finds it empty the
    whole pool is regenerated according to the refill policy:

    - ``SYNCHRONOUS``: the calling thread regenerates the pool while holding
      the pool lock, then serves from the new batch.
    - ``ASYNCHRONOUS``: a background thread regenerates the pool; the calling
      thread, and any other caller arriving before the swap, gets a directly
      generated identifier instead.

    Every pop and swap happens under one lock, and at most one refill is in
    flight at a time.
    """

    name = "Pooled ID Generation"

    def __init__(
        self,
        capacity: int,
        policy: RefillPolicy | str = RefillPolicy.ASYNCHRONOUS,
        generator: Callable[[], str] | None = None,
    ) -> None:
        """Initialise and fill the pool.

        Args:
            capacity: Number of identifiers generated per (re)fill.
            policy: Refill policy, as a RefillPolicy or its config spelling.
            generator: Zero-argument callable returning a new identifier.

        Raises:
            ConfigurationError: If capacity is not a positive integer or the
                policy is unknown.
        """
        super().__init__(generator)
        self.capacity = require_positive_int("capacity", capacity)
        self.policy = RefillPolicy.parse(policy)
        self.refill_count = 0

        self._lock = Lock()
        self._refill_idle = Event()
        self._refill_idle.set()
        self._refill_thread: Thread | None = None
        self._refill_error: GenerationFailure | None = None

        self._pool: list[str] = self._generate_batch()

    @property
    def pool_size(self) -> int:
        """Number of identifiers currently waiting in the pool."""
        with self._lock:
            return len(self._pool)

    @property
    def refill_in_progress(self) -> bool:
        """Whether a background refill has started but not yet swapped in."""
        return not self._refill_idle.is_set()

    def next(self) -> str:
        if self.policy is RefillPolicy.SYNCHRONOUS:
            return self._next_synchronous()
        return self._next_asynchronous()

    def wait_for_refill(self, timeout: float | None = None) -> bool:
        """Block until no background refill is in flight.

        Args:
            timeout: Maximum seconds to wait, or None to wait indefinitely.

        Returns:
            True if the source is idle, False if the timeout expired first.
        """
        return self._refill_idle.wait(timeout)

    def _generate_batch(self) -> list[str]:
        """Generate a full pool's worth of fresh identifiers.

        Returns:
            A new list of ``capacity`` identifiers.
        """
        return [self.generate() for _ in range(self.capacity)]

    def _next_synchronous(self) -> str:
        with self._lock:
            if not self._pool:
                logger.debug("🔄 Pool empty, regenerating %s identifiers", self.capacity)
                self._pool = self._generate_batch()
                self.refill_count += 1
            return self._pool.pop()

    def _next_asynchronous(self) -> str:
        with self._lock:
            if self._refill_error is not None:
                error, self._refill_error = self._refill_error, None
                raise error

            if self._pool:
                return self._pool.pop()

            if self._refill_idle.is_set():
                self._refill_idle.clear()
                self.refill_count += 1
                self._refill_thread = Thread(target=self._refill_loop, daemon=True)
                self._refill_thread.start()

        # Fallback while the new batch is being built
        return self.generate()

    def _refill_loop(self) -> None:
        """Build a new pool in the background and swap it in under the lock."""
        logger.debug("🔄 Background refill of %s identifiers started", self.capacity)
        try:
            batch = self._generate_batch()
        except GenerationFailure as e:
            logger.error("❌ Background refill failed: %s", e)
            with self._lock:
                self._refill_error = e
                self._refill_idle.set()
            return

        with self._lock:
            self._pool = batch
            self._refill_idle.set()
        logger.debug("✅ Background refill complete")
