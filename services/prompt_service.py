"""
Turn the payload shapes GHL survey webhooks send into a single prompt string.

Shapes are recognized in a fixed priority order and the first match wins:

1. ``{"message": "..."}``: direct text.
2. ``{"survey_answers" | "form_answers" | "custom_fields": [{question|name, answer|value}, ...]}``
3. the same aliases holding a flat ``{key: value}`` mapping.
4. anything else, rendered as indented JSON.
"""
import json
from typing import Any

from schemas.payload import ClassifiedPayload, PayloadKind

ANSWER_ALIASES = ("survey_answers", "form_answers", "custom_fields")
LABEL_KEYS = ("question", "name")
VALUE_KEYS = ("answer", "value")


def _is_set(value: Any) -> bool:
    # empty lists and objects still count as a submitted answers field
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def _first_set(entry: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = entry.get(key)
        if _is_set(value):
            return value
    # answers like false or 0 are kept when no alternate key is set
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return ""


def format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def dump_payload(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def classify_payload(payload: Any) -> ClassifiedPayload:
    if not isinstance(payload, dict):
        return ClassifiedPayload(kind=PayloadKind.RAW, value=payload, raw_payload=payload)

    message = payload.get("message")
    if _is_set(message):
        return ClassifiedPayload(kind=PayloadKind.MESSAGE, value=message, raw_payload=payload)

    answers = None
    for alias in ANSWER_ALIASES:
        if _is_set(payload.get(alias)):
            answers = payload[alias]
            break

    if isinstance(answers, list):
        return ClassifiedPayload(kind=PayloadKind.ANSWER_LIST, value=answers, raw_payload=payload)
    if isinstance(answers, dict):
        return ClassifiedPayload(kind=PayloadKind.ANSWER_MAP, value=answers, raw_payload=payload)
    return ClassifiedPayload(kind=PayloadKind.RAW, value=payload, raw_payload=payload)


def _render_entry(entry: Any) -> str:
    if not isinstance(entry, dict):
        return f": {format_value(entry)}"
    label = _first_set(entry, LABEL_KEYS)
    value = _first_set(entry, VALUE_KEYS)
    return f"{format_value(label)}: {format_value(value)}"


def render_prompt(classified: ClassifiedPayload) -> str:
    kind = classified.kind
    if kind is PayloadKind.MESSAGE:
        if isinstance(classified.value, str):
            return classified.value
        return dump_payload(classified.value)
    if kind is PayloadKind.ANSWER_LIST:
        return "\n".join(_render_entry(entry) for entry in classified.value)
    if kind is PayloadKind.ANSWER_MAP:
        return "\n".join(
            f"{key}: {format_value(value)}" for key, value in classified.value.items()
        )
    return dump_payload(classified.raw_payload)


def normalize(payload: Any) -> str:
    return render_prompt(classify_payload(payload))
