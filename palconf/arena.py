"""Ownership region for the values produced by one parse session.

Python manages memory itself, so the arena is about lifetime rather than
bytes: it records every dynamic array and every custom value with a ``free``
hook produced during a session, and invalidates them together when the
session is released.
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from palconf.errors import SessionReleasedError

logger = logging.getLogger("palconf.arena")

FreeHook = Callable[[Any, "Arena"], None]


class Arena:
    """Single release point for session allocations.

    Attributes:
        allocations: Number of allocations served so far.
    """

    def __init__(self) -> None:
        self._lists: List[list] = []
        self._owned: List[Tuple[Any, FreeHook]] = []
        self._released = False
        self.allocations = 0

    @property
    def released(self) -> bool:
        return self._released

    def _check(self) -> None:
        if self._released:
            raise SessionReleasedError("arena already released")

    def dupe(self, raw: str) -> str:
        """Return an owned copy of ``raw``."""
        self._check()
        self.allocations += 1
        return str(raw)

    def alloc_list(self, n_items: int) -> List[Optional[Any]]:
        """Allocate a list of ``n_items`` empty slots owned by this arena."""
        self._check()
        items: List[Optional[Any]] = [None] * n_items
        self._lists.append(items)
        self.allocations += 1
        return items

    def own(self, value: Any, free: FreeHook) -> Any:
        """Register ``value`` so that ``free(value, arena)`` runs on release.

        Returns:
            The value itself, for chaining.
        """
        self._check()
        self._owned.append((value, free))
        self.allocations += 1
        return value

    def release(self) -> None:
        """Run free hooks in reverse order and empty every owned list.

        Releasing an already released arena does nothing.
        """
        if self._released:
            return
        self._released = True

        for value, free in reversed(self._owned):
            free(value, self)
        for items in self._lists:
            items.clear()

        logger.debug(
            "Arena released: %d allocation(s), %d free hook(s)",
            self.allocations,
            len(self._owned),
        )
        self._owned.clear()
        self._lists.clear()


__all__ = ["Arena", "FreeHook"]
