from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter

from http_handler.core.interfaces.response_decoder import ResponseDecoderPort

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter_for(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


class PydanticJsonDecoder(ResponseDecoderPort):
    """Decodes JSON bytes into any type pydantic can validate.

    Works for BaseModel subclasses, dataclasses, TypedDicts and plain
    containers such as `list[int]`. Invalid JSON or a schema mismatch raises
    `pydantic.ValidationError`.
    """

    def decode(self, model: Type[T], data: bytes) -> T:
        return _adapter_for(model).validate_json(data)
