import logging
import time
from typing import Any

import httpx

from core.config import Settings
from core.errors import ServerError, UpstreamError, describe_exception
from core.http_client import build_timeout

logger = logging.getLogger(__name__)

PROMPT_SURVEY_REPLY = (
    "You turn survey answers into a short, useful response for the user. "
    "Be clear, concise, and actionable."
)

NO_REPLY = "(no reply)"


def extract_reply(data: Any) -> str:
    if not isinstance(data, dict):
        return NO_REPLY
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return NO_REPLY
    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        return NO_REPLY
    return content.strip() or NO_REPLY


class CompletionService:
    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    def build_request(self, prompt: str) -> dict:
        return {
            "model": self.settings.openai_model,
            "messages": [
                {"role": "system", "content": PROMPT_SURVEY_REPLY},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.settings.openai_temperature,
        }

    async def complete(self, prompt: str) -> str:
        api_key = self.settings.require_openai_key()
        headers = {"Authorization": f"Bearer {api_key}"}
        start = time.perf_counter()
        try:
            response = await self.client.post(
                self.settings.completions_url,
                json=self.build_request(prompt),
                headers=headers,
                timeout=build_timeout(self.settings),
            )
        except httpx.RequestError as exc:
            logger.exception(
                "Completion request failed",
                extra={"elapsed_s": round(time.perf_counter() - start, 3)},
            )
            raise ServerError(describe_exception(exc)) from exc

        elapsed = round(time.perf_counter() - start, 3)
        if not response.is_success:
            body = response.text
            logger.error(
                "Completion request rejected with status=%s request_id=%s body=%s",
                response.status_code,
                response.headers.get("x-request-id"),
                body[:1000],
                extra={"elapsed_s": elapsed},
            )
            raise UpstreamError(body)

        logger.info(
            "Completion request completed",
            extra={"status_code": response.status_code, "elapsed_s": elapsed},
        )
        return extract_reply(response.json())
