import logging

from http_handler.adapters.logging_adapter import LoggingAdapter
from http_handler.core.logging_config import coerce_level, configure_logging, request_id_var


def test_coerce_level():
    assert coerce_level(None) == logging.INFO
    assert coerce_level("debug") == logging.DEBUG
    assert coerce_level(logging.ERROR) == logging.ERROR
    assert coerce_level("nonsense") == logging.INFO


def test_configure_logging_installs_two_sinks_once():
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        configure_logging("DEBUG")
        configure_logging("DEBUG")
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


def test_adapter_delegates_to_standard_logging(caplog):
    adapter = LoggingAdapter("http_handler.test", "DEBUG")
    token = request_id_var.set("abc123")
    try:
        with caplog.at_level(logging.DEBUG, logger="http_handler.test"):
            adapter.warning("sent %s", "GET")
    finally:
        request_id_var.reset(token)

    assert caplog.records[-1].getMessage() == "sent GET"
    assert caplog.records[-1].levelno == logging.WARNING


def test_sinks_split_by_level_and_carry_request_id():
    root = logging.getLogger()
    saved = list(root.handlers), root.level
    try:
        configure_logging("DEBUG")
        stdout_sink, stderr_sink = root.handlers
        info = logging.LogRecord("http_handler", logging.INFO, __file__, 1, "hi", None, None)
        error = logging.LogRecord("http_handler", logging.ERROR, __file__, 1, "boom", None, None)

        assert stdout_sink.filter(info) and not stdout_sink.filter(error)
        assert stderr_sink.filter(error) and not stderr_sink.filter(info)
        assert info.request_id == request_id_var.get()
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
