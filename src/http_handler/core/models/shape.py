from enum import Enum
from typing import Any


class ExpectedShape(str, Enum):
    """Closed set of JSON shapes a weakly-typed response may be checked against."""

    object = "object"
    array = "array"
    string = "string"
    number = "number"
    boolean = "boolean"
    any = "any"

    def matches(self, value: Any) -> bool:
        if self is ExpectedShape.any:
            return True
        if self is ExpectedShape.object:
            return isinstance(value, dict)
        if self is ExpectedShape.array:
            return isinstance(value, list)
        if self is ExpectedShape.string:
            return isinstance(value, str)
        if self is ExpectedShape.boolean:
            return isinstance(value, bool)
        # bool is an int subclass but never a JSON number
        return isinstance(value, (int, float)) and not isinstance(value, bool)
