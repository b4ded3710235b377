import httpx
from fastapi import Depends
from core.config import Settings, settings
from core.http_client import get_async_client
from services.completion_service import CompletionService
from services.webhook_service import WebhookService

def get_settings() -> Settings:
    return settings

def get_http_client(config: Settings = Depends(get_settings)) -> httpx.AsyncClient:
    return get_async_client(config)

def get_completion_service(
    config: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> CompletionService:
    return CompletionService(settings=config, client=client)

def get_webhook_service(
    completion_service: CompletionService = Depends(get_completion_service),
) -> WebhookService:
    return WebhookService(completion_service=completion_service)
