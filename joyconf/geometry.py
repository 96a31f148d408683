"""Layout arithmetic for the centred combo box label and the info icon."""


def _trunc(value: float) -> int:
    return int(value)


def centered_label_left(center_x: int, right: int, arrow_width: int, text_width: float) -> int:
    """Left edge for a combo box label so the text looks centred.

    The text is placed slightly left of the box centre to balance the drop
    arrow, and shifted further left when it would run into the arrow.
    """
    offset = _trunc(center_x - arrow_width / 3.2 - text_width / 2)
    limit = right - arrow_width
    if offset + text_width * 1.1 > limit:
        offset = _trunc(offset - ((offset + text_width * 1.1) - limit))
        if offset < 0:
            offset = 0
    return offset


def height_for_width(pixmap_width: int, pixmap_height: int, width: int, fallback_height: int) -> int:
    """Height that keeps a pixmap's aspect ratio at the given width.

    A null pixmap (no width or height) yields ``fallback_height``.
    """
    if pixmap_width <= 0 or pixmap_height <= 0:
        return fallback_height
    return _trunc(pixmap_height * width / pixmap_width)