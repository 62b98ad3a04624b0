"""Field geometry: positions, footholds, drop landing and mob capacity."""

from __future__ import annotations

import json
import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

INT16_MAX = 0x7FFF


def _int16(value: int) -> int:
    """Wrap an integer to the signed 16-bit range."""
    return ((int(value) + 0x8000) & 0xFFFF) - 0x8000


def _trunc_div(a: int, b: int) -> int:
    """Integer division that truncates toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


@dataclass(frozen=True)
class Pos:
    """A point in a field, with the foothold it stands on."""

    x: int = 0
    y: int = 0
    foothold: int = 0

    def distance_square(self, other: "Pos") -> int:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def __str__(self) -> str:
        return f"{self.x}, {self.y} (foothold {self.foothold})"


def within_x(check: int, x1: int, x2: int) -> bool:
    """True when check lies in the closed range [x1, x2]."""
    return x1 <= check <= x2


def cross_product(x: int, x1: int, x2: int, y: int, y1: int, y2: int) -> float:
    """Signed area of (x, y) against the line through (x1, y1) and (x2, y2).

    Zero is on the line, positive is above it and negative below.
    """
    return float(_int16(x - x1)) * float(_int16(y2 - y1)) - float(
        _int16(y - y1)
    ) * float(_int16(x2 - x1))


@dataclass(frozen=True)
class Foothold:
    """A platform segment that characters, mobs and drops rest on."""

    id: int
    x1: int
    y1: int
    x2: int
    y2: int
    prev_id: int = 0
    next_id: int = 0
    centre_x: int = field(init=False)
    centre_y: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "centre_x", _trunc_div(_int16(self.x1 + self.x2), 2))
        object.__setattr__(self, "centre_y", _trunc_div(_int16(self.y1 + self.y2), 2))

    def is_slope(self) -> bool:
        return self.y1 != self.y2

    def is_wall(self) -> bool:
        return self.x1 == self.x2

    def is_above(self, point: Pos, ignore_x: bool) -> bool:
        """True when the point is above or on this foothold."""
        if not ignore_x and not within_x(point.x, self.x1, self.x2):
            return False
        return cross_product(point.x, self.x1, self.x2, point.y, self.y1, self.y2) >= 0

    def find_pos(self, point: Pos) -> Pos:
        """Project the point vertically onto this foothold."""
        if not self.is_slope():
            return Pos(point.x, self.y1, self.id)

        denominator = _int16(self.x1 - self.x2)
        if denominator == 0:
            raise ValueError("cannot project a point onto a wall")

        ratio = float(_int16(point.x - self.x1)) / float(denominator)
        offset = int(ratio * float(_int16(self.y1 - self.y2)))
        return Pos(point.x, _int16(self.y1 + offset), self.id)

    def distance_from_pos_square(self, point: Pos) -> tuple[int, int, int]:
        """Return the squared distance to the centre and the clamped landing x, y."""
        delta_x = _int16(point.x - self.centre_x)
        delta_y = _int16(point.y - self.centre_y)

        clamp_x, clamp_y = _int16(self.x1 + 30), self.y1
        if delta_x > 0:
            clamp_x, clamp_y = _int16(self.x2 - 30), self.y2

        return _int16(delta_x * delta_x + delta_y * delta_y), clamp_x, clamp_y


class FootholdHistogram:
    """Footholds bucketed by x so that lookups only scan nearby segments."""

    def __init__(self, footholds: Iterable[Foothold]) -> None:
        self.footholds = tuple(footholds)
        if not self.footholds:
            raise ValueError("a foothold histogram needs at least one foothold")

        min_x = max_x = 0
        for fh in self.footholds:
            if fh.is_wall():
                continue
            min_x = min(min_x, fh.x1)
            max_x = max(max_x, fh.x2)

        delta = _int16(max_x - min_x)
        if delta <= 0:
            raise ValueError("footholds span no horizontal width")

        self.min_x = min_x
        self.bin_size = math.ceil(delta / len(self.footholds))
        bin_count = math.ceil(delta / self.bin_size)
        self.bins: list[list[Foothold]] = [[] for _ in range(bin_count + 1)]

        for fh in self.footholds:
            if fh.is_wall():
                continue
            for index in range(self.bin_index(fh.x1), self.bin_index(fh.x2) + 1):
                self.bins[index].append(fh)

    def bin_index(self, x: int) -> int:
        offset = _int16(x - self.min_x)
        if offset > 0:
            return _int16(math.ceil(offset / self.bin_size))
        if offset == 0:
            return 0
        return -1

    def get_final_position(self, point: Pos) -> Pos:
        """Return where something dropped at the point comes to rest."""
        index = self.bin_index(point.x)
        if index < 0:
            return self._find_nearest_point(0, point)
        if index > len(self.bins) - 1:
            return self._find_nearest_point(len(self.bins) - 1, point)
        return self._retrieve_position(index, point)

    def _retrieve_position(self, index: int, point: Pos) -> Pos:
        best: Pos | None = None
        for fh in self.bins[index]:
            if fh.is_wall() or not fh.is_above(point, False):
                continue
            landing = fh.find_pos(point)
            if landing.y >= point.y and (best is None or landing.y < best.y):
                best = landing

        if best is None:
            return self._find_nearest_point(index, point)
        return best

    def _find_nearest_point(self, index: int, point: Pos) -> Pos:
        nearest = point
        best_distance = INT16_MAX
        for fh in self.bins[index]:
            if fh.is_wall() or not fh.is_above(point, True):
                continue
            distance, clamp_x, clamp_y = fh.distance_from_pos_square(point)
            if distance < best_distance:
                best_distance = distance
                nearest = replace(point, x=clamp_x, y=clamp_y)
        return nearest

    def to_json(self) -> str:
        """Summarise bin occupancy for debugging."""
        return json.dumps(
            {
                "Bins": [len(b) for b in self.bins],
                "MinX": self.min_x,
                "BinSize": self.bin_size,
            },
            separators=(",", ":"),
        )


@dataclass(frozen=True)
class FieldRectangle:
    """A rectangle given by left, top, right and bottom edges."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    def inflate(self, x: int, y: int) -> "FieldRectangle":
        dx = _trunc_div(x, 2)
        dy = _trunc_div(y, 2)
        return FieldRectangle(
            self.left - dx, self.top + dy, self.right + dx, self.bottom - dy
        )

    def is_empty(self) -> bool:
        return self.left == 0 and self.top == 0 and self.right == 0 and self.bottom == 0

    def width(self) -> int:
        return abs(self.left - self.right)

    def height(self) -> int:
        return abs(self.top - self.bottom)


@dataclass(frozen=True)
class FieldLimits:
    """View bounds and mob capacity computed for a field."""

    vr_limit: FieldRectangle
    mob_capacity_min: int
    mob_capacity_max: int


def calculate_field_limits(
    footholds: Iterable[Foothold], vr_limit: FieldRectangle, mob_rate: float
) -> FieldLimits:
    """Work out the view rectangle and mob spawn capacity of a field."""
    left = top = 0x7FFFFFFF
    right = bottom = -0x80000000

    for fh in footholds:
        left = min(left, fh.x1, fh.x2)
        top = min(top, fh.y1, fh.y2)
        right = max(right, fh.x1, fh.x2)
        bottom = max(bottom, fh.y1, fh.y2)

    if vr_limit.is_empty():
        view = FieldRectangle(left, top - 300, right, bottom + 75)
    else:
        view = vr_limit

    left += 30
    top -= 300
    right -= 30
    bottom += 10

    if not vr_limit.is_empty():
        if vr_limit.left + 20 < left:
            left = vr_limit.left + 20
        if vr_limit.top + 65 < top:
            top = vr_limit.top + 20
        if vr_limit.right - 5 > right:
            right = vr_limit.right - 5
        if vr_limit.bottom > bottom:
            bottom = vr_limit.bottom

    mbr = FieldRectangle(left + 10, top - 375, right - 10, bottom + 60).inflate(10, 10)

    mob_x = mbr.width() if mbr.width() > 800 else 800
    mob_y = mbr.height() - 450 if mbr.height() - 450 > 600 else 600

    capacity = int(float(mob_x * mob_y) * mob_rate * 0.0000078125)
    capacity = max(1, min(40, capacity))

    return FieldLimits(view, capacity, capacity * 2)