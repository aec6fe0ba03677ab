"""Labelled filter options offered by the editor's button bar."""

from __future__ import annotations
from dataclasses import dataclass

from imagepicker.requests import (
    TransformRequest, request_from_dict,
    Scale, Rotate, Translate, MirrorHorizontal, MirrorVertical,
    Brightness, Contrast, Grayscale, LowPass, GaussianBlur,
)


@dataclass(frozen=True)
class FilterOption:
    label: str
    request: TransformRequest

    def to_dict(self) -> dict:
        d = self.request.to_dict()
        d["label"] = self.label
        return d

    @classmethod
    def from_dict(cls, d: dict) -> FilterOption:
        return cls(label=str(d["label"]), request=request_from_dict(d))


def default_options() -> list[FilterOption]:
    """The stock button set. Returns a fresh list on every call."""
    return [
        FilterOption("+ Scale", Scale(1.1)),
        FilterOption("- Scale", Scale(0.9)),
        FilterOption("Rotate left", Rotate(-90.0)),
        FilterOption("Rotate right", Rotate(90.0)),
        FilterOption("Mirror V", MirrorVertical()),
        FilterOption("Mirror H", MirrorHorizontal()),
        FilterOption("Translate X", Translate(25.0, 0.0)),
        FilterOption("Translate Y", Translate(0.0, 25.0)),
        FilterOption("+ Brightness", Brightness(10.0)),
        FilterOption("- Brightness", Brightness(-10.0)),
        FilterOption("+ Contrast", Contrast(1.2)),
        FilterOption("- Contrast", Contrast(0.8)),
        FilterOption("Grayscale", Grayscale()),
        FilterOption("Low Pass Filter", LowPass(3)),
        # Historical label; the button has always applied a Gaussian blur.
        FilterOption("High Pass Filter", GaussianBlur()),
    ]


def find_option(label: str, options: list[FilterOption] | None = None) -> FilterOption | None:
    for option in options if options is not None else default_options():
        if option.label == label:
            return option
    return None
