# http_handler/core/interfaces/request.py
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from http_handler.core.models.request_type import RequestType


class HttpRequestPort(ABC):
    """Describes one HTTP call relative to the handler's base URL."""

    @abstractmethod
    def endpoint(self) -> str:
        pass

    @abstractmethod
    def method(self) -> str:
        pass

    @abstractmethod
    def parameters(self) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def headers(self) -> Dict[str, str]:
        pass

    @abstractmethod
    def type(self) -> RequestType:
        """Coarse body kind. Both kinds are currently sent the same way."""
        pass
