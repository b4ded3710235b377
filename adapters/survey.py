from typing import Any

from adapters.base import BaseAdapter

class SurveyWebhookAdapter(BaseAdapter):

    def to_payload(self, body: Any) -> Any:
        # GHL posts the survey payload as-is
        return body
