from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from rest_framework.response import Response

    from solar.exceptions import FluxError

logger = logging.getLogger(__name__)

JSONValue: TypeAlias = (
    None
    | bool
    | int
    | float
    | str
    | list["JSONValue"]
    | dict[str, "JSONValue"]
)


def _to_json_value(value: object) -> JSONValue:
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, Mapping):
        return {str(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_to_json_value(v) for v in value]
    return str(value)


def _flux_error_response(exc: FluxError) -> Response:
    from solar.exceptions import AcquisitionFailed

    from .responses import error_response

    status_code = int(exc.status_code)
    if status_code >= 500:
        logger.error("flux.request_failed code=%s error=%s", exc.code, exc)
    else:
        logger.info("flux.request_rejected code=%s error=%s", exc.code, exc)

    errors: dict[str, JSONValue] = {"code": exc.code}
    if isinstance(exc, AcquisitionFailed) and exc.upstream_status is not None:
        errors["upstream_status"] = exc.upstream_status

    return error_response(
        exc.public_message, errors=errors, status_code=status_code
    )


def custom_exception_handler(
    exc: Exception,
    context: dict[str, Any],
) -> Response:
    # Lazy imports: safe even if settings aren't configured at import time.
    from rest_framework import status
    from rest_framework.response import Response
    from rest_framework.views import exception_handler as drf_exception_handler

    from solar.exceptions import FluxError

    if isinstance(exc, FluxError):
        return _flux_error_response(exc)

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled API error", exc_info=exc)
        return Response(
            {"status": 1, "message": "Internal server error", "errors": None},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = _to_json_value(response.data)
    message = "Request failed"
    if isinstance(detail, dict):
        maybe = detail.get("detail")
        if isinstance(maybe, str):
            message = maybe

    response.data = {"status": 1, "message": message, "errors": detail}
    return response
