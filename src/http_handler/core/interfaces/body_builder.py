from abc import ABC, abstractmethod
from typing import Optional

from http_handler.core.interfaces.request import HttpRequestPort


class BodyBuilderPort(ABC):
    @abstractmethod
    def build_body(self, request: HttpRequestPort) -> Optional[bytes]:
        """Serialize the request parameters, or return None when no body is sent.

        Raises SerializationError when the parameters cannot be serialized.
        """
        pass
