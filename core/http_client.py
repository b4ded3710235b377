from typing import Optional

import httpx

from core.config import Settings, settings as default_settings

USER_AGENT = "survey-relay/0.1"

_async_client: Optional[httpx.AsyncClient] = None


def build_timeout(config: Settings) -> httpx.Timeout:
    return httpx.Timeout(config.openai_timeout_seconds, connect=10.0)


def build_async_client(config: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=build_timeout(config),
        headers={"User-Agent": USER_AGENT},
    )


def init_async_client(config: Settings | None = None) -> httpx.AsyncClient:
    global _async_client
    if _async_client is None:
        _async_client = build_async_client(config or default_settings)
    return _async_client


def get_async_client(config: Settings | None = None) -> httpx.AsyncClient:
    return init_async_client(config)


async def close_async_client() -> None:
    global _async_client
    if _async_client is not None:
        await _async_client.aclose()
        _async_client = None
