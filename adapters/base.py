from abc import ABC, abstractmethod
from typing import Any

class BaseAdapter(ABC):

    @abstractmethod
    def to_payload(self, body: Any) -> Any:
        """Reshape an endpoint's request body into the payload to normalize."""
