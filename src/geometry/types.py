"""Value types shared by the planar geometry modules.

All types are immutable; coordinates are plain floats so they can be fed
straight from Python sequences or NumPy arrays.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Orientation(Enum):
    """Side of a directed line a test point falls on."""

    LEFT = "left"
    RIGHT = "right"
    ON = "on"


@dataclass(frozen=True)
class Point:
    """A planar (x, y) coordinate pair."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle given by its (left, top) and (right, bottom) corners.

    Both y-up (top > bottom) and y-down (bottom > top) screen conventions are
    accepted; consumers infer the orientation from the corner values.
    """

    left: float
    top: float
    right: float
    bottom: float


__all__ = ["Orientation", "Point", "Box"]
