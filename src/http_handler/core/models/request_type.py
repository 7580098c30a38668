from enum import Enum


class RequestType(str, Enum):
    regular = "regular"
    multipart = "multipart"
