from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rest_framework.negotiation import BaseContentNegotiation
from rest_framework.parsers import BaseParser
from rest_framework.renderers import BaseRenderer
from rest_framework.request import Request


class IgnoreClientContentNegotiation(BaseContentNegotiation):
    """Always pick the first renderer.

    Binary endpoints are called with `Accept: image/tiff` or `image/png`;
    their JSON error bodies must still render instead of failing with 406.
    """

    def select_parser(
        self, request: Request, parsers: Sequence[BaseParser]
    ) -> BaseParser:
        return parsers[0]

    def select_renderer(
        self,
        request: Request,
        renderers: Sequence[BaseRenderer],
        format_suffix: Any = None,
    ) -> tuple[BaseRenderer, str]:
        return renderers[0], renderers[0].media_type
