"""Error taxonomy for the raster proxy and flux renderer.

Every stage raises a `FluxError` subclass and never retries. The DRF
exception handler in `config.api.exceptions` maps these onto HTTP statuses
using `status_code` and `public_message`, so client-facing text never carries
upstream bodies or credentials.
"""

from __future__ import annotations

from typing import ClassVar


class FluxError(Exception):
    """Base class for raster proxy and renderer failures."""

    status_code: ClassVar[int] = 500
    public_message: ClassVar[str] = "Internal server error"
    default_code: ClassVar[str] = "flux_error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code or self.default_code


class InvalidRequest(FluxError):
    """Missing or malformed raster identifier or source URL."""

    status_code = 400
    public_message = "Missing id parameter"
    default_code = "invalid_request"


class ConfigurationError(FluxError):
    """The server-held solar API credential is not configured."""

    status_code = 500
    public_message = "API key not configured"
    default_code = "missing_config"


class UpstreamError(FluxError):
    """Signals a non-2xx response from the upstream raster endpoint."""

    status_code = 502
    public_message = "Failed to fetch TIFF"
    default_code = "upstream_error"

    def __init__(self, status_code: int, snippet: str | None = None) -> None:
        self.upstream_status = status_code
        self.snippet = snippet
        message = f"Solar API raster error status={status_code}"
        if snippet:
            message = f"{message} body={snippet}"
        super().__init__(message)


class DecodeError(FluxError):
    """Raster bytes are not a readable GeoTIFF or hold no positive samples."""

    status_code = 422
    public_message = "Could not decode flux data"
    default_code = "decode_error"


class InternalError(FluxError):
    """Unexpected fault while talking to the upstream service."""

    default_code = "internal_error"


class AcquisitionFailed(FluxError):
    """Wraps a proxy-layer failure raised while acquiring raster bytes."""

    public_message = "Failed to fetch flux data"
    default_code = "acquisition_failed"

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(f"Raster acquisition failed: {error}")

    @property
    def status_code(self) -> int:  # type: ignore[override]
        if isinstance(self.error, ConfigurationError):
            return ConfigurationError.status_code
        if isinstance(self.error, InvalidRequest):
            return InvalidRequest.status_code
        return 502

    @property
    def upstream_status(self) -> int | None:
        return getattr(self.error, "upstream_status", None)


class RenderCancelled(FluxError):
    """The caller cancelled a render before it finished."""

    status_code = 503
    public_message = "Render cancelled"
    default_code = "cancelled"


class RenderSuperseded(RenderCancelled):
    """A newer render started before this one completed."""

    default_code = "superseded"
