"""Solar flux endpoints.

Authentication: none; the only secret is the server-held Solar API key,
which never leaves the process.

* `getFluxData` relays GeoTIFF bytes and answers failures with a bare
  `{"error": "<str>"}` body.
* The heat map endpoints use `config.api.responses` helpers; failures are
  wrapped by `config.api.exceptions.custom_exception_handler`.
"""

from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from django.http import HttpResponse, HttpResponseNotModified
from django.utils.http import parse_etags
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiTypes,
    extend_schema,
)
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from config.api.negotiation import IgnoreClientContentNegotiation
from config.api.openapi import (
    binary_schema,
    error_envelope_serializer,
    proxy_error_serializer,
    success_envelope_serializer,
)
from config.api.responses import (
    binary_response,
    proxy_error_response,
    success_response,
)

from .exceptions import ConfigurationError, FluxError, UpstreamError
from .metadata import FluxMapMetadata
from .raster.registry import get_raster_proxy
from .serializers import (
    FluxDataRequestSerializer,
    FluxMapRequestSerializer,
    FluxMapSerializer,
)
from .services import build_flux_map, render_flux_png

logger = logging.getLogger(__name__)

flux_error_response = error_envelope_serializer("FluxErrorResponse")
flux_proxy_error_response = proxy_error_serializer("FluxProxyErrorResponse")
flux_map_success_response = success_envelope_serializer(
    "FluxMapSuccess", data=FluxMapSerializer()
)

flux_url_param = OpenApiParameter(
    name="url",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    required=True,
    description="Data-layer URL carrying the raster `id` query parameter",
)

metadata_params = [
    OpenApiParameter(
        name="imagery_date",
        type=OpenApiTypes.STR,
        location=OpenApiParameter.QUERY,
        required=False,
        description="YYYY-MM-DD",
    ),
    OpenApiParameter(
        name="imagery_processed_date",
        type=OpenApiTypes.STR,
        location=OpenApiParameter.QUERY,
        required=False,
        description="YYYY-MM-DD",
    ),
    OpenApiParameter(
        name="imagery_quality",
        type=OpenApiTypes.STR,
        location=OpenApiParameter.QUERY,
        required=False,
    ),
]


def _etag_matches(header: str | None, etag: str) -> bool:
    # Weak comparison, as If-None-Match requires.
    if not header:
        return False
    candidates = parse_etags(header)
    if candidates == ["*"]:
        return True
    return etag in {candidate.removeprefix("W/") for candidate in candidates}


class FluxDataProxyView(APIView):
    """Relay a GeoTIFF from the Solar API without exposing the API key."""

    permission_classes = [AllowAny]
    content_negotiation_class = IgnoreClientContentNegotiation

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="id",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=True,
            )
        ],
        responses={
            200: binary_schema("image/tiff", "Annual flux GeoTIFF"),
            400: flux_proxy_error_response,
            500: flux_proxy_error_response,
        },
    )
    def get(self, request: Request) -> HttpResponse | Response:
        """Return the raw GeoTIFF as an attachment.

        Query params: id (required).
        Failures: 400 missing id, 500 missing key or internal fault,
        otherwise the upstream status code.
        """

        serializer = FluxDataRequestSerializer(data=request.query_params)
        if not serializer.is_valid():
            return proxy_error_response(
                "Missing id parameter",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        try:
            payload = async_to_sync(get_raster_proxy().fetch_raster)(
                serializer.validated_data["id"]
            )
        except ConfigurationError:
            logger.error("getFluxData called without SOLAR_API_KEY configured")
            return proxy_error_response("API key not configured")
        except UpstreamError as exc:
            return proxy_error_response(
                f"Failed to fetch TIFF: {exc.upstream_status}",
                status_code=exc.upstream_status,
            )
        except FluxError:
            logger.exception("Error in getFluxData proxy")
            return proxy_error_response("Internal server error")

        return binary_response(
            payload.content,
            content_type=payload.content_type,
            filename=payload.filename,
        )


class FluxMapPngView(APIView):
    """Serve the annual flux heat map as a transparent PNG."""

    permission_classes = [AllowAny]
    content_negotiation_class = IgnoreClientContentNegotiation

    @extend_schema(
        parameters=[flux_url_param],
        responses={
            200: binary_schema("image/png", "Flux heat map"),
            304: None,
            400: flux_error_response,
            422: flux_error_response,
            502: flux_error_response,
        },
    )
    def get(self, request: Request) -> HttpResponse:
        """Render the heat map; honors If-None-Match against the PNG hash."""

        serializer = FluxMapRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        content, content_hash = async_to_sync(render_flux_png)(
            serializer.validated_data["url"]
        )
        etag = f'"{content_hash}"'
        if _etag_matches(request.headers.get("If-None-Match"), etag):
            not_modified = HttpResponseNotModified()
            not_modified["ETag"] = etag
            return not_modified
        return binary_response(
            content, content_type="image/png", etag=etag
        )


class FluxMapView(APIView):
    """Heat map plus legend and imagery metadata for display."""

    permission_classes = [AllowAny]

    @extend_schema(
        parameters=[flux_url_param, *metadata_params],
        responses={
            200: flux_map_success_response,
            400: flux_error_response,
            422: flux_error_response,
            502: flux_error_response,
        },
    )
    def get(self, request: Request) -> Response:
        """Return the rendered map as a PNG data URI with display metadata.

        Query params: url (required), imagery_date, imagery_processed_date,
        imagery_quality (optional, shown as "N/A" when absent).
        """

        serializer = FluxMapRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        metadata = FluxMapMetadata(
            imagery_date=params.get("imagery_date"),
            imagery_processed_date=params.get("imagery_processed_date"),
            imagery_quality=params.get("imagery_quality"),
        )
        payload = async_to_sync(build_flux_map)(params["url"], metadata)
        return success_response(payload, message="Solar flux map")
