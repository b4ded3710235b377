import enum
from typing import Any

from pydantic import BaseModel


class PayloadKind(str, enum.Enum):
    MESSAGE = "message"
    ANSWER_LIST = "answer_list"
    ANSWER_MAP = "answer_map"
    RAW = "raw"


class ClassifiedPayload(BaseModel):
    kind: PayloadKind
    # the part of the payload the kind is rendered from
    value: Any = None
    raw_payload: Any = None
