"""Per-bed locks serializing reservation writes within one process."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

_LOCKS: dict[uuid.UUID, asyncio.Lock] = {}


def _lock_for(bed_id: uuid.UUID) -> asyncio.Lock:
    lock = _LOCKS.get(bed_id)
    if lock is None:
        lock = asyncio.Lock()
        _LOCKS[bed_id] = lock
    return lock


@asynccontextmanager
async def bed_lock(bed_id: uuid.UUID) -> AsyncIterator[None]:
    """Hold the write lock for a bed for the duration of the block."""
    async with _lock_for(bed_id):
        yield


def clear() -> None:
    """Drop all locks (mainly for tests)."""
    _LOCKS.clear()
