from __future__ import annotations

import contextvars
from concurrent.futures import Executor, Future


def submit_in_context(pool: Executor, fn, /, *args, **kwargs) -> Future:
    """Submit ``fn`` so it runs with a copy of the caller's context variables (e.g. the session token)."""
    ctx = contextvars.copy_context()
    return pool.submit(ctx.run, fn, *args, **kwargs)
