# Logging adapter for library-wide logging
from http_handler.adapters.logging_adapter import LoggingAdapter

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from rich import print

from http_handler.core.interfaces.logging import LoggingPort

# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class HandlerSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }
    HTTP_HANDLER_LOG_LEVEL: str = "INFO"
    HTTP_HANDLER_BASE_URL: str = "http://localhost:8000"
    HTTP_HANDLER_REQUEST_TIMEOUT: float = Field(default=60.0, gt=0)  # seconds
    # Ask caches and proxies to revalidate every request
    HTTP_HANDLER_BYPASS_CACHE: bool = True
    HTTP_HANDLER_SUCCESS_STATUS_CODES: list[int] = [200, 201, 202, 203, 204]
    # The only status accepted by shape-checked (weakly typed) calls
    HTTP_HANDLER_STRICT_STATUS_CODE: int = 200

    def print_settings(self, logger: LoggingPort):
        """Prints the settings for debugging purposes"""
        logger.info("HTTP handler settings:")
        print(self)

    @field_validator("HTTP_HANDLER_BASE_URL", mode="before")
    def strip_trailing_slash(cls, value: str) -> str:
        """Endpoints start with '/', so drop a trailing slash from the base URL."""
        if isinstance(value, str):
            return value.rstrip("/")
        return value


app_settings = HandlerSettings()

logger: LoggingPort = LoggingAdapter("http_handler", app_settings.HTTP_HANDLER_LOG_LEVEL)


def set_logger(new_logger: LoggingPort) -> None:
    """Replace the module-level logger (called by the composition root)."""
    global logger
    logger = new_logger
