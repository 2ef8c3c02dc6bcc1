"""
Async wrappers for blocking operations.
Keeps database work and timing off the event loop's critical path.
"""

import asyncio
import functools
import time
from typing import Callable, Any
from .logger import logger


async def async_database_operation(db_func: Callable, *args, **kwargs) -> Any:
    """Run a blocking database function in the default executor"""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: db_func(*args, **kwargs))


def time_operation(operation_name: str):
    """Decorator to log the duration of an async operation"""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.monotonic()
            try:
                result = await func(*args, **kwargs)
                duration = time.monotonic() - start_time
                logger.info(f"PERFORMANCE: {operation_name} completed in {duration:.3f}s")
                return result
            except Exception as e:
                duration = time.monotonic() - start_time
                logger.warning(f"PERFORMANCE: {operation_name} failed in {duration:.3f}s - {str(e)}")
                raise
        return wrapper
    return decorator
