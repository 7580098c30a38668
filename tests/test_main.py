import logging

import pytest
from aioresponses import aioresponses
from click.testing import CliRunner

from http_handler.main import main

BASE_URL = "http://api.example.test"


@pytest.fixture(autouse=True)
def restore_root_logging():
    # main() reconfigures the root logger onto the runner's captured streams
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_cli_prints_decoded_mapping():
    with aioresponses() as m:
        m.get(f"{BASE_URL}/items", payload={"count": 3})
        result = CliRunner().invoke(main, ["/items", "--base-url", BASE_URL])

    assert result.exit_code == 0, result.output
    assert "'count': 3" in result.output


def test_cli_posts_parameters():
    with aioresponses() as m:
        m.post(f"{BASE_URL}/items", payload={"id": 1}, status=201)
        result = CliRunner().invoke(
            main, ["/items", "-X", "post", "-p", "name=a", "-H", "X-Key: k", "--base-url", BASE_URL]
        )
        call = next(iter(m.requests.values()))[0]

    assert result.exit_code == 0, result.output
    assert call.kwargs["data"] == b'{"name":"a"}'
    assert call.kwargs["headers"]["X-Key"] == "k"


def test_cli_reports_errors_with_exit_code():
    result = CliRunner().invoke(main, ["/items", "--base-url", "not a url"])

    assert result.exit_code == 1
    assert "InvalidUrlError" in result.output


def test_cli_rejects_malformed_pairs():
    result = CliRunner().invoke(main, ["/items", "-p", "novalue", "--base-url", BASE_URL])

    assert result.exit_code != 0
    assert "KEY=VALUE" in result.output
