from abc import ABC, abstractmethod
from typing import Type, TypeVar

T = TypeVar("T")


class ResponseDecoderPort(ABC):
    @abstractmethod
    def decode(self, model: Type[T], data: bytes) -> T:
        """Decode raw response bytes into an instance of `model`.

        Implementations raise their own decode error on failure; the handler
        passes it through unchanged.
        """
        pass
