from adapters.base import BaseAdapter
from adapters.generate import GenerateAdapter
from adapters.survey import SurveyWebhookAdapter

ADAPTERS: dict[str, BaseAdapter] = {
    "survey": SurveyWebhookAdapter(),
    "generate": GenerateAdapter(),
}

def get_adapter(source: str) -> BaseAdapter:
    adapter = ADAPTERS.get(source)
    if not adapter:
        raise RuntimeError(f"No adapter found for source: {source}")
    return adapter
