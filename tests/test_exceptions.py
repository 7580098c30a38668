import pytest

from http_handler.core.exceptions import (
    CustomError,
    HttpHandlerError,
    InvalidUrlError,
    NoDataFromServerError,
    NotExpectedDataStructureError,
    NotHttpResponseError,
    ServerReportedUnsuccessfulOperationError,
    ServerResponseIsNotUnboxableDictionaryError,
    ServerResponseNotParseableError,
    ServerResponseReturnedError,
    WrongStatusCodeError,
)


@pytest.mark.parametrize(
    "error, expected",
    [
        (WrongStatusCodeError("status 500"), "Wrong http status code : status 500"),
        (WrongStatusCodeError(), "Wrong http status code"),
        (ServerResponseNotParseableError("not json"), "Bad server response - not parsable : not json"),
        (NotHttpResponseError("none"), "Not http response : none"),
        (NoDataFromServerError(), "No data from server"),
        (InvalidUrlError("bad/url"), "Invalid URL : bad/url"),
        (NotExpectedDataStructureError("list"), "Not expected data structure from server : list"),
        (ServerResponseIsNotUnboxableDictionaryError("x"), "Server response is not unboxable : x"),
        (ServerReportedUnsuccessfulOperationError(), "Server reported unsuccessful operation"),
        (ServerResponseReturnedError("e1, e2"), "Server response returned error : e1, e2"),
        (CustomError("Something specific"), "Something specific"),
    ],
)
def test_error_descriptions(error, expected):
    assert isinstance(error, HttpHandlerError)
    assert error.description == expected
    assert str(error) == expected


def test_server_response_returned_error_keeps_errors():
    assert ServerResponseReturnedError("e1").errors == "e1"
