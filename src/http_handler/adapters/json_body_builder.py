import json
from typing import Optional

from http_handler.core.exceptions import SerializationError
from http_handler.core.interfaces.body_builder import BodyBuilderPort
from http_handler.core.interfaces.request import HttpRequestPort


class JsonBodyBuilder(BodyBuilderPort):
    """Serializes request parameters as a compact JSON object.

    GET requests and requests without parameters get no body; an empty
    mapping is still sent as `{}`. Non-finite
    floats are rejected since they have no JSON representation.
    """

    def build_body(self, request: HttpRequestPort) -> Optional[bytes]:
        if request.method().upper() == "GET":
            return None

        params = request.parameters()
        if params is None:
            return None

        try:
            encoded = json.dumps(params, separators=(",", ":"), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Request parameters for {request.endpoint()} are not JSON serializable: {exc}",
                parameters=params,
            ) from exc

        return encoded.encode("utf-8")
