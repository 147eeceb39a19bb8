from __future__ import annotations

from rest_framework import serializers

from .exceptions import InvalidRequest
from .raster.renderer import extract_raster_id


class FluxDataRequestSerializer(serializers.Serializer):
    id = serializers.CharField(
        required=True, allow_blank=False, trim_whitespace=True
    )


class FluxMapRequestSerializer(serializers.Serializer):
    url = serializers.CharField(
        required=True, allow_blank=False, trim_whitespace=True
    )
    imagery_date = serializers.CharField(required=False, allow_blank=True)
    imagery_processed_date = serializers.CharField(
        required=False, allow_blank=True
    )
    imagery_quality = serializers.CharField(required=False, allow_blank=True)

    def validate_url(self, value: str) -> str:
        try:
            extract_raster_id(value)
        except InvalidRequest as exc:
            raise serializers.ValidationError(
                "url must contain an id query parameter."
            ) from exc
        return value


class FluxRangeSerializer(serializers.Serializer):
    min = serializers.FloatField()
    max = serializers.FloatField()


class FluxLegendSerializer(serializers.Serializer):
    low = serializers.CharField()
    high = serializers.CharField()
    caption = serializers.CharField()


class FluxMetadataSerializer(serializers.Serializer):
    analysis_date = serializers.CharField()
    imagery_date = serializers.CharField()
    imagery_quality = serializers.CharField()


class FluxMapSerializer(serializers.Serializer):
    raster_id = serializers.CharField()
    width = serializers.IntegerField()
    height = serializers.IntegerField()
    range = FluxRangeSerializer()
    legend = FluxLegendSerializer()
    metadata = FluxMetadataSerializer()
    image = serializers.CharField(help_text="PNG data URI")
    download_url = serializers.CharField()
