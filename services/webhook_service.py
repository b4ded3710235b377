import logging
from typing import Any

from core.errors import RelayError, ServerError, describe_exception
from schemas.relay import SurveyReply
from services.completion_service import CompletionService
from services.prompt_service import classify_payload, render_prompt

class WebhookService:
    def __init__(self, completion_service: CompletionService):
        self.completion_service = completion_service
        self.logger = logging.getLogger(__name__)

    async def relay(self, payload: Any) -> SurveyReply:
        try:
            classified = classify_payload(payload)
            self.logger.info(
                "WebhookService relaying payload",
                extra={"payload_kind": classified.kind.value},
            )
            prompt = render_prompt(classified)
            reply = await self.completion_service.complete(prompt)
        except RelayError:
            raise
        except Exception as exc:
            self.logger.exception("Server error")
            raise ServerError(describe_exception(exc)) from exc
        return SurveyReply(ok=True, reply=reply)
