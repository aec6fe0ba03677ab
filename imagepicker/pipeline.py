"""Stateless dispatch of transform requests onto pixel buffers."""

from __future__ import annotations
from typing import Iterable, Union
import logging

from imagepicker.buffer import PixelBuffer
from imagepicker.config import DEFAULT_CONFIG, EngineConfig
from imagepicker.errors import EngineError, InvalidParameter
from imagepicker.requests import TransformRequest, request_from_dict

logger = logging.getLogger(__name__)

RequestLike = Union[TransformRequest, dict]


def _as_request(request: RequestLike) -> TransformRequest:
    if isinstance(request, dict):
        return request_from_dict(request)
    if not isinstance(request, TransformRequest):
        raise InvalidParameter("request", request, "not a transform request")
    return request


def apply(request: RequestLike, buffer: PixelBuffer,
          config: EngineConfig | None = None) -> PixelBuffer:
    """Run one request against buffer and return the new buffer.

    The input buffer is never modified, so on failure the caller can keep
    showing what it already has.
    """
    req = _as_request(request)
    if not isinstance(buffer, PixelBuffer):
        raise InvalidParameter("buffer", type(buffer).__name__, "expected a PixelBuffer")
    cfg = config or DEFAULT_CONFIG
    try:
        result = req.apply(buffer, cfg)
    except EngineError as e:
        logger.debug("%s rejected on %dx%d buffer: %s", req, buffer.width, buffer.height, e)
        raise
    logger.debug("%s: %dx%d -> %dx%d", req, buffer.width, buffer.height,
                 result.width, result.height)
    return result


def apply_all(requests: Iterable[RequestLike], buffer: PixelBuffer,
              config: EngineConfig | None = None) -> PixelBuffer:
    """Apply requests left to right, each to the previous result."""
    for request in requests:
        buffer = apply(request, buffer, config)
    return buffer


class TransformPipeline:
    """Binds an EngineConfig to apply/apply_all. Holds no other state."""

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def apply(self, request: RequestLike, buffer: PixelBuffer) -> PixelBuffer:
        return apply(request, buffer, self.config)

    def apply_all(self, requests: Iterable[RequestLike], buffer: PixelBuffer) -> PixelBuffer:
        return apply_all(requests, buffer, self.config)
