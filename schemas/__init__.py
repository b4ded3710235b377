from .payload import ClassifiedPayload, PayloadKind
from .relay import ErrorResponse, HealthResponse, SurveyReply

__all__ = [
    "ClassifiedPayload",
    "PayloadKind",
    "ErrorResponse",
    "HealthResponse",
    "SurveyReply",
]
