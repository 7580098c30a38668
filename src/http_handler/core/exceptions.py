from typing import Optional


class HttpHandlerError(Exception):
    """Base exception for failures reported by the HTTP handler.

    Attributes:
        message: Optional detail, e.g. a response debug description or the raw
            response text
    """

    title: str = "HTTP handler error"

    def __init__(self, message: Optional[str] = None):
        self.message = message
        super().__init__(self.description)

    @property
    def description(self) -> str:
        """Human readable form: the error title, followed by the detail if any."""
        if self.message is None:
            return self.title
        return f"{self.title} : {self.message}"


class WrongStatusCodeError(HttpHandlerError):
    """Response received but its status code is outside the accepted set."""

    title = "Wrong http status code"


class ServerResponseNotParseableError(HttpHandlerError):
    """Response body is not JSON, or not the JSON shape that was asked for."""

    title = "Bad server response - not parsable"


class NotHttpResponseError(HttpHandlerError):
    title = "Not http response"


class NoDataFromServerError(HttpHandlerError):
    """Response carried no body at all, whatever its status code."""

    title = "No data from server"

    def __init__(self):
        super().__init__(None)


class InvalidUrlError(HttpHandlerError):
    """Base URL and endpoint do not combine into an absolute http(s) URL."""

    title = "Invalid URL"


# Reserved kinds: exported for callers that layer their own response
# conventions on top of the handler. The handler itself never raises them.

class NotExpectedDataStructureError(HttpHandlerError):
    title = "Not expected data structure from server"


class ServerResponseIsNotUnboxableDictionaryError(HttpHandlerError):
    title = "Server response is not unboxable"


class ServerReportedUnsuccessfulOperationError(HttpHandlerError):
    title = "Server reported unsuccessful operation"

    def __init__(self):
        super().__init__(None)


class ServerResponseReturnedError(HttpHandlerError):
    title = "Server response returned error"

    def __init__(self, errors: Optional[str] = None):
        self.errors = errors
        super().__init__(errors)


class CustomError(HttpHandlerError):
    """Caller defined error; the message is the whole description."""

    def __init__(self, message: str):
        super().__init__(message)

    @property
    def description(self) -> str:
        return self.message or ""


class SerializationError(Exception):
    """Request parameters could not be serialized into a body."""

    def __init__(self, message: str, parameters: Optional[dict] = None):
        self.message = message
        self.parameters = parameters
        super().__init__(message)
