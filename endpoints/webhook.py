import json
import logging
from typing import Any
from fastapi import APIRouter, Request, Depends
from adapters.registry import get_adapter
from core.errors import InvalidPayloadError
from dependencies.services import get_webhook_service
from schemas.relay import SurveyReply
from services.webhook_service import WebhookService

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/webhook/survey", response_model=SurveyReply)
async def survey_webhook(
    request: Request,
    webhook_service: WebhookService = Depends(get_webhook_service),
):
    body = await _read_json_body(request, "survey")
    return await webhook_service.relay(get_adapter("survey").to_payload(body))

@router.post("/api/generate", response_model=SurveyReply)
async def generate(
    request: Request,
    webhook_service: WebhookService = Depends(get_webhook_service),
):
    body = await _read_json_body(request, "generate")
    return await webhook_service.relay(get_adapter("generate").to_payload(body))

async def _read_json_body(request: Request, source: str) -> Any:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning(
            "Webhook invalid JSON payload",
            extra={"source": source, "body_len": len(body)},
        )
        raise InvalidPayloadError()
    except RecursionError:
        logger.warning(
            "Webhook JSON payload nested too deeply",
            extra={"source": source, "body_len": len(body)},
        )
        raise InvalidPayloadError("JSON nesting too deep")
