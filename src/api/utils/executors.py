"""Run blocking conversion work off the event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


async def run_sync(func: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
    """Execute *func* in a worker thread so rendering never blocks other requests."""

    return await asyncio.to_thread(func, *args, **kwargs)


__all__ = ["run_sync"]
