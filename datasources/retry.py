"""
Retry decorator for series store reads.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Type, TypeVar, Tuple, cast

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def retry(
    *,
    attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
) -> Callable[[F], F]:
    """Re-invoke the wrapped callable on ``exceptions`` up to ``attempts`` times.

    The pause between attempts starts at ``delay`` and is multiplied by
    ``backoff`` after each failure; the last exception is re-raised.
    """
    def decorator(func: F) -> F:
        name = getattr(func, "__qualname__", repr(func))

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                attempt = 0
                pause = delay
                while True:
                    try:
                        return await func(*args, **kwargs)
                    except exceptions as exc:
                        attempt += 1
                        if attempt >= attempts:
                            raise
                        log.debug("%s failed (%s), retry %d/%d in %.2fs", name, exc, attempt, attempts - 1, pause)
                        await asyncio.sleep(pause)
                        pause *= backoff

            return cast(F, async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 0
            pause = delay
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as exc:
                    attempt += 1
                    if attempt >= attempts:
                        raise
                    log.debug("%s failed (%s), retry %d/%d in %.2fs", name, exc, attempt, attempts - 1, pause)
                    time.sleep(pause)
                    pause *= backoff

        return cast(F, sync_wrapper)

    return decorator
