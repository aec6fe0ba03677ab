"""Tagged transform requests dispatched by the pipeline."""

from __future__ import annotations
from dataclasses import fields

from imagepicker.errors import InvalidParameter
from imagepicker.requests.base import TransformRequest
from imagepicker.requests.geometric import (
    Scale, Rotate, Translate, MirrorHorizontal, MirrorVertical,
)
from imagepicker.requests.photometric import Brightness, Contrast, Grayscale
from imagepicker.requests.blur import LowPass, GaussianBlur

REQUEST_CLASSES: dict[str, type[TransformRequest]] = {
    cls.name: cls
    for cls in (Scale, Rotate, Translate, MirrorHorizontal, MirrorVertical,
                Brightness, Contrast, Grayscale, LowPass, GaussianBlur)
}

REQUEST_NAMES = list(REQUEST_CLASSES)


def request_from_dict(d: dict) -> TransformRequest:
    """Build a request from {"name": ..., **params}; unknown keys are ignored."""
    name = d.get("name")
    if not isinstance(name, str):
        raise InvalidParameter("name", name, "request name must be a string")
    cls = REQUEST_CLASSES.get(name)
    if cls is None:
        raise InvalidParameter("name", name, f"expected one of {', '.join(REQUEST_NAMES)}")
    params = {f.name: d[f.name] for f in fields(cls) if f.name in d}
    try:
        return cls(**params)
    except TypeError as e:
        raise InvalidParameter(name, d, str(e)) from e


__all__ = [
    "TransformRequest", "REQUEST_CLASSES", "REQUEST_NAMES", "request_from_dict",
    "Scale", "Rotate", "Translate", "MirrorHorizontal", "MirrorVertical",
    "Brightness", "Contrast", "Grayscale", "LowPass", "GaussianBlur",
]
