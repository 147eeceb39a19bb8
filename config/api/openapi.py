"""drf-spectacular helpers for documenting the project's response shapes.

`config.api.responses` and the global DRF exception handler wrap JSON
responses in a status/message/data/errors envelope; the GeoTIFF proxy instead
answers failures with a bare `{"error": ...}` object. These helpers generate
matching serializers for OpenAPI documentation without changing runtime
behavior.
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiResponse, inline_serializer
from rest_framework import serializers
from rest_framework.serializers import Serializer


def success_envelope_serializer(
    name: str,
    *,
    data: serializers.Field,
) -> Serializer:
    """Build an OpenAPI schema matching `success_response`."""

    return inline_serializer(
        name=name,
        fields={
            "status": serializers.IntegerField(),
            "message": serializers.CharField(),
            "data": data,
            "errors": serializers.JSONField(allow_null=True),
        },
    )


def error_envelope_serializer(name: str) -> Serializer:
    """Build an OpenAPI schema matching `custom_exception_handler`."""

    return inline_serializer(
        name=name,
        fields={
            "status": serializers.IntegerField(),
            "message": serializers.CharField(),
            "errors": serializers.JSONField(allow_null=True),
        },
    )


def proxy_error_serializer(name: str) -> Serializer:
    """Build an OpenAPI schema matching `proxy_error_response`."""

    return inline_serializer(
        name=name,
        fields={"error": serializers.CharField()},
    )


def binary_schema(media_type: str, description: str) -> OpenApiResponse:
    """Describe a raw binary body such as a GeoTIFF or PNG."""

    return OpenApiResponse(
        response=OpenApiTypes.BINARY,
        description=f"{description} ({media_type})",
    )
