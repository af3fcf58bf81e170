import math
from typing import List, Tuple

from hexsort.constants import (
    HEX_SIZE, HEX_SPACING, BOARD_CENTER_Y_PCT,
    OPTION_ROW_Y, OPTION_SLOT_SPACING,
)

SQRT3 = math.sqrt(3)


def board_origin(window_width: int, window_height: int) -> Tuple[float, float]:
    """Pixel position of the (0, 0) cell center."""
    return window_width / 2, window_height * BOARD_CENTER_Y_PCT


def axial_to_pixel(q: int, r: int, origin: Tuple[float, float], size: float = HEX_SIZE) -> Tuple[float, float]:
    """Center of a pointy-top hex; r grows downwards on screen."""
    pitch = size * (1 + HEX_SPACING)
    x = (SQRT3 * q + SQRT3 / 2 * r) * pitch
    y = 1.5 * r * pitch
    return origin[0] + x, origin[1] - y


def hex_round(qf: float, rf: float) -> Tuple[int, int]:
    """Round fractional axial coordinates to the containing hex (cube rounding)."""
    sf = -qf - rf
    q, r, s = round(qf), round(rf), round(sf)
    dq, dr, ds = abs(q - qf), abs(r - rf), abs(s - sf)
    if dq > dr and dq > ds:
        q = -r - s
    elif dr > ds:
        r = -q - s
    return int(q), int(r)


def pixel_to_axial(x: float, y: float, origin: Tuple[float, float], size: float = HEX_SIZE) -> Tuple[int, int]:
    pitch = size * (1 + HEX_SPACING)
    px = (x - origin[0]) / pitch
    py = (origin[1] - y) / pitch
    rf = py / 1.5
    qf = px / SQRT3 - rf / 2
    return hex_round(qf, rf)


def hex_corners(cx: float, cy: float, size: float = HEX_SIZE) -> List[Tuple[float, float]]:
    return [
        (cx + size * math.cos(math.radians(60 * i - 30)), cy + size * math.sin(math.radians(60 * i - 30)))
        for i in range(6)
    ]


def option_slot_center(slot: int, slots: int, window_width: int) -> Tuple[float, float]:
    offset = (slot - (slots - 1) / 2) * OPTION_SLOT_SPACING
    return window_width / 2 + offset, OPTION_ROW_Y


def option_slot_at(x: float, y: float, slots: int, window_width: int, size: float = HEX_SIZE) -> int | None:
    for slot in range(slots):
        cx, cy = option_slot_center(slot, slots, window_width)
        if math.hypot(x - cx, y - cy) <= size * 1.5:
            return slot
    return None
