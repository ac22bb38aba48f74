"""
cached_chat.py — Cached, retry-wrapped chat call example.

Demonstrates the process-wide caches: a flaky fake provider fails once
with a 503, the invoker retries, and the second identical question is
served from the LLM cache.

Usage:
    python examples/cached_chat.py
"""

import logging

from clinicore import InvocationRequest, Message, RuntimeCaches
from clinicore.llms import CacheSettings


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    attempts = {"n": 0}

    async def flaky_provider(request: InvocationRequest) -> dict:
        attempts["n"] += 1
        if attempts["n"] == 1:
            raise RuntimeError("503 Service Unavailable")
        return {"text": f"Echo: {request.messages[-1].content}"}

    settings = CacheSettings(retry_delay_s=0.1)
    with RuntimeCaches.from_settings(settings) as caches:
        invoker = caches.llm_invoker()
        request = InvocationRequest(
            messages=[
                Message(role="system", content="You are the clinic front-desk assistant."),
                Message(role="user", content="Do you offer laser hair removal?"),
            ]
        )

        first = await invoker.invoke(request, flaky_provider)
        print(first)
        second = await invoker.invoke(request, flaky_provider)
        print(second)
        print(invoker.cache_stats())


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
