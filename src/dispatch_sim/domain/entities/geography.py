import math
from dataclasses import dataclass


# Core geometry types; coordinates are canvas pixels
@dataclass(frozen=True)
class Point:
    x: float
    y: float


Pt = Point | tuple[float, float]


def to_point(p: Pt) -> Point:
    return p if isinstance(p, Point) else Point(float(p[0]), float(p[1]))


def distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


@dataclass(frozen=True)
class Bounds:
    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self):
        if self.x1 < self.x0 or self.y1 < self.y0:
            raise ValueError(f"degenerate bounds {self}")

    @classmethod
    def of_map(cls, width: float, height: float) -> "Bounds":
        return cls(0.0, 0.0, float(width), float(height))

    def inset(self, margin: float) -> "Bounds":
        return Bounds(self.x0 + margin, self.y0 + margin, self.x1 - margin, self.y1 - margin)

    def contains(self, p: Point) -> bool:
        return self.x0 <= p.x <= self.x1 and self.y0 <= p.y <= self.y1

    def clamp(self, p: Point) -> Point:
        return Point(min(max(p.x, self.x0), self.x1), min(max(p.y, self.y0), self.y1))
