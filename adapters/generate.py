from typing import Any

from adapters.base import BaseAdapter

class GenerateAdapter(BaseAdapter):

    def to_payload(self, body: Any) -> dict:
        if isinstance(body, dict) and body.get("message") is not None:
            return {"message": body["message"]}
        return {"message": body}
