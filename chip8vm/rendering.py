"""Turn the CHIP-8 display into images and text frames."""

from typing import Tuple

import jax.numpy as jnp
import numpy as np

Color = Tuple[int, int, int]

# (on, off) pairs
COLOR_SCHEMES = {
    "classic": ((0, 255, 0), (0, 0, 0)),
    "amber": ((255, 176, 0), (0, 0, 0)),
    "white": ((255, 255, 255), (0, 0, 0)),
    "blue": ((0, 255, 255), (0, 0, 64)),
    "retro": ((255, 255, 0), (64, 0, 64)),
}


def pixel_rows(display: jnp.ndarray) -> np.ndarray:
    """Display as a host boolean array laid out (row, column), top row first."""
    return np.asarray(display, dtype=np.bool_).T


def chip8_display_to_rgb(
    display: jnp.ndarray,
    scale: int = 8,
    on_color: Color = COLOR_SCHEMES["classic"][0],
    off_color: Color = COLOR_SCHEMES["classic"][1],
) -> np.ndarray:
    """RGB image of the display, each pixel drawn as a ``scale`` x ``scale`` block.

    Works for every display mode. The result has shape
    (height*scale, width*scale, 3) and dtype uint8.
    """
    palette = np.array([off_color, on_color], dtype=np.uint8)
    image = palette[pixel_rows(display).astype(np.intp)]
    if scale > 1:
        image = image.repeat(scale, axis=0).repeat(scale, axis=1)
    return image


def create_color_scheme(scheme: str = "classic") -> Tuple[Color, Color]:
    """Look up the (on, off) colours of a named scheme."""
    try:
        return COLOR_SCHEMES[scheme]
    except KeyError:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {sorted(COLOR_SCHEMES)}"
        ) from None


def chip8_display_to_text(display: jnp.ndarray, on: str = "*", off: str = " ") -> str:
    """Render the display as text framed with box-drawing characters."""
    rows = pixel_rows(display)
    border = "─" * rows.shape[1]
    lines = [f"┌{border}┐"]
    lines.extend("│" + "".join(on if lit else off for lit in row) + "│" for row in rows)
    lines.append(f"└{border}┘")
    return "\n".join(lines)
