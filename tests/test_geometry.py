import json

import pytest

from valhalla.geometry import (
    FieldRectangle,
    Foothold,
    FootholdHistogram,
    Pos,
    calculate_field_limits,
    cross_product,
    within_x,
)

FLOOR = Foothold(1, -100, 0, 100, 0)
UPPER = Foothold(2, -50, -100, 50, -100)
SLOPE = Foothold(3, 0, 0, 10, 10)
WALL = Foothold(4, 0, 0, 0, 100)


def test_within_x_is_inclusive():
    assert within_x(5, 5, 10)
    assert within_x(10, 5, 10)
    assert not within_x(4, 5, 10)
    assert not within_x(11, 5, 10)


def test_cross_product_sign():
    assert cross_product(5, 0, 10, 5, 0, 10) == 0
    assert cross_product(5, 0, 10, 0, 0, 10) > 0
    assert cross_product(5, 0, 10, 10, 0, 10) < 0


def test_pos_distance_square_symmetric():
    a, b = Pos(3, 4), Pos(-2, 7)
    assert a.distance_square(b) == b.distance_square(a)
    assert a.distance_square(a) == 0


def test_foothold_kinds():
    assert not FLOOR.is_slope()
    assert not FLOOR.is_wall()
    assert SLOPE.is_slope()
    assert WALL.is_wall()


def test_foothold_centre_lies_between_ends():
    assert FLOOR.x1 <= FLOOR.centre_x <= FLOOR.x2
    assert FLOOR.centre_y == FLOOR.y1


def test_is_above_respects_range_unless_ignored():
    outside = Pos(200, -10)
    assert not FLOOR.is_above(outside, False)
    assert FLOOR.is_above(outside, True)
    assert FLOOR.is_above(Pos(0, -10), False)
    assert not FLOOR.is_above(Pos(0, 10), False)


def test_find_pos_on_flat_uses_foothold_height():
    assert FLOOR.find_pos(Pos(30, -50)) == Pos(30, FLOOR.y1, FLOOR.id)


def test_find_pos_on_slope_lies_on_line():
    landed = SLOPE.find_pos(Pos(5, -20))
    assert landed.x == 5
    assert landed.foothold == SLOPE.id
    assert cross_product(landed.x, SLOPE.x1, SLOPE.x2, landed.y, SLOPE.y1, SLOPE.y2) == 0


def test_find_pos_on_sloped_wall_raises():
    with pytest.raises(ValueError):
        Foothold(5, 0, 0, 0, 50).find_pos(Pos(0, -10))


def test_distance_from_centre_is_zero():
    distance, _, clamp_y = FLOOR.distance_from_pos_square(
        Pos(FLOOR.centre_x, FLOOR.centre_y)
    )
    assert distance == 0
    assert clamp_y == FLOOR.y1


def test_distance_clamps_to_side_of_point():
    _, right_x, right_y = FLOOR.distance_from_pos_square(Pos(90, -10))
    _, left_x, left_y = FLOOR.distance_from_pos_square(Pos(-90, -10))
    assert right_y == FLOOR.y2
    assert left_y == FLOOR.y1
    assert FLOOR.centre_x < right_x < FLOOR.x2
    assert FLOOR.x1 < left_x < FLOOR.centre_x


def test_distance_stays_in_int16_range():
    distance, _, _ = FLOOR.distance_from_pos_square(Pos(-30000, -30000))
    assert -32768 <= distance <= 32767


def test_histogram_rejects_empty_and_walls_only():
    with pytest.raises(ValueError):
        FootholdHistogram([])
    with pytest.raises(ValueError):
        FootholdHistogram([WALL])


def test_histogram_bin_index_bounds():
    hist = FootholdHistogram([FLOOR, UPPER])
    assert hist.min_x == FLOOR.x1
    assert hist.bin_index(hist.min_x) == 0
    assert hist.bin_index(hist.min_x - 1) == -1
    assert hist.bin_index(FLOOR.x2) == len(hist.bins) - 1
    assert hist.bin_index(0) <= hist.bin_index(FLOOR.x2)


def test_histogram_json_summary():
    hist = FootholdHistogram([FLOOR, UPPER, WALL])
    summary = json.loads(hist.to_json())
    assert summary["MinX"] == hist.min_x
    assert summary["BinSize"] == hist.bin_size
    assert summary["Bins"] == [len(b) for b in hist.bins]
    assert all(WALL not in b for b in hist.bins)


def test_drop_lands_on_floor():
    hist = FootholdHistogram([FLOOR])
    assert hist.get_final_position(Pos(0, -50)) == Pos(0, FLOOR.y1, FLOOR.id)


def test_drop_lands_on_highest_floor_below():
    hist = FootholdHistogram([FLOOR, UPPER])
    assert hist.get_final_position(Pos(0, -150)) == Pos(0, UPPER.y1, UPPER.id)
    assert hist.get_final_position(Pos(0, -50)) == Pos(0, FLOOR.y1, FLOOR.id)


def test_drop_outside_range_is_clamped_onto_floor():
    hist = FootholdHistogram([FLOOR])
    landed = hist.get_final_position(Pos(-200, -50, 7))
    assert landed.y == FLOOR.y1
    assert FLOOR.x1 < landed.x < FLOOR.x2
    assert landed.foothold == 7


def test_drop_below_everything_stays_put():
    hist = FootholdHistogram([FLOOR])
    point = Pos(0, 50)
    assert hist.get_final_position(point) == point


def test_rectangle_empty_and_size():
    assert FieldRectangle(0, 0, 0, 0).is_empty()
    assert not FieldRectangle(0, 0, 1, 0).is_empty()
    rect = FieldRectangle(-20, -40, 30, 60)
    flipped = FieldRectangle(30, 60, -20, -40)
    assert rect.width() == flipped.width()
    assert rect.height() == flipped.height()


def test_rectangle_inflate_grows_sideways():
    rect = FieldRectangle(-20, -40, 30, 60)
    bigger = rect.inflate(10, 10)
    assert bigger.left < rect.left
    assert bigger.right > rect.right
    assert bigger.width() == rect.width() + 10


FIELD_FOOTHOLDS = [Foothold(1, -500, 0, 500, 0), Foothold(2, -300, -200, 300, -200)]


def test_field_limits_derive_view_from_footholds():
    limits = calculate_field_limits(FIELD_FOOTHOLDS, FieldRectangle(), 1.0)
    view = limits.vr_limit
    assert view.left == -500
    assert view.right == 500
    assert view.top < -200
    assert view.bottom > 0


def test_field_limits_keep_given_view():
    given = FieldRectangle(-600, -800, 600, 200)
    limits = calculate_field_limits(FIELD_FOOTHOLDS, given, 1.0)
    assert limits.vr_limit == given


@pytest.mark.parametrize("rate", [0.0, 0.5, 1.0, 2.0, 1000.0])
def test_mob_capacity_bounds(rate):
    limits = calculate_field_limits(FIELD_FOOTHOLDS, FieldRectangle(), rate)
    assert 1 <= limits.mob_capacity_min <= 40
    assert limits.mob_capacity_max == 2 * limits.mob_capacity_min


def test_mob_capacity_extremes_and_monotonic():
    low = calculate_field_limits(FIELD_FOOTHOLDS, FieldRectangle(), 0.0)
    high = calculate_field_limits(FIELD_FOOTHOLDS, FieldRectangle(), 1000.0)
    mid = calculate_field_limits(FIELD_FOOTHOLDS, FieldRectangle(), 0.5)
    more = calculate_field_limits(FIELD_FOOTHOLDS, FieldRectangle(), 2.0)
    assert low.mob_capacity_min == 1
    assert high.mob_capacity_min == 40
    assert mid.mob_capacity_min <= more.mob_capacity_min