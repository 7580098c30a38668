from typing import Any, Dict, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Success(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: T
    headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return True


class Failure(BaseModel):
    """Failed dispatch.

    `raw_body` keeps the undecoded response body when one was received, for
    diagnostics after a decode error.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error: BaseException
    headers: Dict[str, str] = Field(default_factory=dict)
    raw_body: Optional[bytes] = None

    @property
    def is_success(self) -> bool:
        return False


Result = Union[Success[Any], Failure]
