"""Engine-wide settings threaded through the transform pipeline."""

from __future__ import annotations
from dataclasses import dataclass, asdict

from imagepicker.errors import InvalidParameter
from imagepicker.geometric import RESAMPLE_MODES


@dataclass(frozen=True)
class EngineConfig:
    """Knobs that change how a transform runs, never what it means.

    workers: row bands processed in parallel by convolution filters.
    rotate_resample: "nearest" or "bilinear" sampling for rotation.
    """
    workers: int = 1
    rotate_resample: str = "nearest"

    def __post_init__(self):
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise InvalidParameter("workers", self.workers, "must be a positive integer")
        if self.rotate_resample not in RESAMPLE_MODES:
            raise InvalidParameter("rotate_resample", self.rotate_resample,
                                   f"expected one of {', '.join(RESAMPLE_MODES)}")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> EngineConfig:
        return cls(**{k: d[k] for k in cls.__dataclass_fields__ if k in d})


DEFAULT_CONFIG = EngineConfig()
