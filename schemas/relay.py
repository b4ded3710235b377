from typing import Optional

from pydantic import BaseModel


class SurveyReply(BaseModel):
    ok: bool = True
    reply: str


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    ok: bool = True
