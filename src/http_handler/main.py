# main.py
import asyncio
from typing import Any, Dict, Optional, Tuple

import click
from rich.console import Console
from rich.pretty import Pretty

from http_handler.adapters.aiohttp_client_adapter import AioHttpClientAdapter
from http_handler.adapters.logging_adapter import LoggingAdapter
from http_handler.adapters.schedulers import LoopScheduler
from http_handler.core.config import HandlerConfig
from http_handler.core.logging_config import configure_logging
from http_handler.core.managers.http_handler import HttpHandler
from http_handler.core.models.request import HandlerRequest
from http_handler.core.settings import app_settings, set_logger


# main lives at the outermost layer (not in core)
# Instantiates the concrete adapters, wires them into a handler
# and runs a single request from the command line

def build_handler(base_url: Optional[str] = None) -> HttpHandler:
    return HttpHandler(
        base_url or app_settings.HTTP_HANDLER_BASE_URL,
        http_client=AioHttpClientAdapter(),
        scheduler=LoopScheduler(),
        config=HandlerConfig.from_app_settings(app_settings),
    )


def _split_pairs(values: Tuple[str, ...], separator: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for item in values:
        key, found, value = item.partition(separator)
        if not found or not key.strip():
            raise click.BadParameter(f"expected KEY{separator}VALUE, got {item!r}")
        pairs[key.strip()] = value.strip()
    return pairs


async def _run_once(handler: HttpHandler, request: HandlerRequest) -> Tuple[Any, Dict[str, Any], Any]:
    done: asyncio.Future = asyncio.get_running_loop().create_future()

    def completion(mapping, headers, error):
        done.set_result((mapping, headers, error))

    async with handler:
        handler.make(request, completion)
        return await done


@click.command()
@click.argument("endpoint")
@click.option("--method", "-X", default="GET", show_default=True, help="HTTP method")
@click.option("--header", "-H", "headers", multiple=True, help="Header as KEY:VALUE")
@click.option("--param", "-p", "params", multiple=True, help="Body parameter as KEY=VALUE")
@click.option("--base-url", default=None, help="Overrides HTTP_HANDLER_BASE_URL")
@click.option("--show-settings", is_flag=True, help="Print the effective settings first")
def main(endpoint, method, headers, params, base_url, show_settings):
    """Send one request to ENDPOINT and print the decoded JSON object."""
    # Central logging configuration BEFORE injecting the adapter
    configure_logging(app_settings.HTTP_HANDLER_LOG_LEVEL)
    logger = LoggingAdapter("http_handler", app_settings.HTTP_HANDLER_LOG_LEVEL)
    set_logger(logger)

    if show_settings:
        app_settings.print_settings(logger)

    request = HandlerRequest(
        endpoint,
        method=method.upper(),
        parameters=_split_pairs(params, "=") or None,
        headers=_split_pairs(headers, ":"),
    )
    mapping, response_headers, error = asyncio.run(_run_once(build_handler(base_url), request))

    console = Console()
    if error is not None:
        console.print(f"[bold red]{type(error).__name__}[/bold red]: {error}")
        raise SystemExit(1)
    console.print(Pretty(response_headers))
    console.print(Pretty(mapping))


if __name__ == "__main__":
    main()
