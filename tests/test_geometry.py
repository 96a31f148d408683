import pytest

from joyconf.geometry import centered_label_left, height_for_width


def test_no_arrow_no_text_is_centre():
    assert centered_label_left(50, 100, 0, 0) == 50


def test_text_too_wide_clamps_to_zero():
    assert centered_label_left(50, 100, 18, 500) == 0


def test_result_never_negative():
    for width in range(0, 400, 17):
        assert centered_label_left(60, 120, 18, width) >= 0


def test_wider_text_moves_left():
    lefts = [centered_label_left(100, 200, 18, w) for w in range(0, 150, 10)]
    assert lefts == sorted(lefts, reverse=True)


def test_arrow_moves_label_left():
    assert centered_label_left(100, 200, 30, 20) < centered_label_left(100, 200, 0, 20)


def test_null_pixmap_uses_fallback():
    assert height_for_width(0, 0, 40, 12) == 12
    assert height_for_width(10, 0, 40, 9) == 9


def test_same_width_gives_pixmap_height():
    assert height_for_width(64, 48, 64, 0) == 48


@pytest.mark.parametrize("scale", [1, 2, 3, 5])
def test_scaling_keeps_ratio(scale):
    assert height_for_width(16, 12, 16 * scale, 0) == 12 * scale


def test_half_width():
    assert height_for_width(100, 50, 40, 7) == 20