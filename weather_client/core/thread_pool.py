"""
Client-owned thread pool for running blocking functions.

The Ollama SDK's `chat()` blocks, and a sampling request from the server
arrives on the MCP session's receive loop. Running the model call here
keeps the session responsive (progress and log notifications keep flowing)
while the model generates.

Usage::

    from weather_client.core.thread_pool import run_in_thread
    result = await run_in_thread(fn, ...)
"""

import asyncio
import concurrent.futures
import functools

# Shared executor for the whole client.
_client_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=4, thread_name_prefix="client-worker"
)


async def run_in_thread(func, *args, **kwargs):
    """Run *func(*args, **kwargs)* in the client-owned thread pool.

    Supports keyword arguments (which plain ``loop.run_in_executor`` does
    not).
    """
    loop = asyncio.get_running_loop()
    call = functools.partial(func, *args, **kwargs)
    return await loop.run_in_executor(_client_executor, call)
