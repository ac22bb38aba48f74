from __future__ import annotations

import asyncio

from clinicore import InvocationRequest, Message, RuntimeCaches
from clinicore.llms import CacheSettings


def run_async(coro):
    return asyncio.run(coro)


def _settings() -> CacheSettings:
    return CacheSettings(
        llm_cache_ttl_s=30.0,
        image_cache_ttl_s=90.0,
        sweep_interval_s=None,
        max_retries=0,
        retry_delay_s=0.0,
    )


def test_caches_are_independent_instances_with_purpose_ttls():
    with RuntimeCaches.from_settings(_settings()) as caches:
        assert caches.llm is not caches.image
        assert caches.llm.default_ttl_s == 30.0
        assert caches.image.default_ttl_s == 90.0

        caches.llm.set("k", "chat")
        assert caches.image.get("k") is None


def test_close_destroys_both_caches():
    caches = RuntimeCaches.from_settings(_settings())
    caches.llm.set("a", 1)
    caches.image.set("b", 2)

    caches.close()
    caches.close()

    assert caches.llm.stats().size == 0
    assert caches.image.stats().size == 0


def test_invokers_share_the_injected_cache():
    request = InvocationRequest(messages=[Message(role="user", content="before/after photos")])
    calls = []

    async def _generate(req):
        calls.append(req)
        return {"url": "https://cdn.example/img.png"}

    with RuntimeCaches.from_settings(_settings()) as caches:
        first = caches.image_invoker()
        second = caches.image_invoker()

        run_async(first.invoke(request, _generate))
        result = run_async(second.invoke(request, _generate))

        assert result.from_cache is True
        assert len(calls) == 1
        assert caches.image.stats().keys[0].startswith("image:")
        assert caches.llm.stats().size == 0
        assert caches.llm_invoker().cache is caches.llm
