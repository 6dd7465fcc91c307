"""Tray icon: a Windows 3.1 style stopwatch whose rim fills as you sit."""
from __future__ import annotations
import math

from PIL import Image, ImageDraw

# Windows 3.1 16-color palette
BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
GRAY = (128, 128, 128, 255)
TEAL = (0, 128, 128, 255)
DARK_TEAL = (0, 80, 80, 255)
LIGHT_CYAN = (128, 192, 192, 255)
RED = (192, 0, 0, 255)
DARK_RED = (128, 0, 0, 255)
MUTED = (100, 110, 110, 255)


def create_status_icon(fraction: float, alarm: bool = False, paused: bool = False,
                       size: int = 64) -> Image.Image:
    """Stopwatch icon; the rim arc covers ``fraction`` of the sitting limit."""
    fraction = max(0.0, min(1.0, fraction))
    scale = size / 64
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    if paused:
        rim, rim_dark = MUTED, GRAY
    elif alarm:
        rim, rim_dark = RED, DARK_RED
    else:
        rim, rim_dark = TEAL, DARK_TEAL

    cx, cy = int(32 * scale), int(36 * scale)
    r_outer = int(23 * scale)
    r_inner = r_outer - max(2, int(5 * scale))

    # Crown button
    draw.rectangle([cx - 4 * scale, 14 * scale, cx + 4 * scale, 20 * scale], fill=rim, outline=BLACK)

    # Rim: dark track, bright arc for elapsed sitting
    box = [cx - r_outer, cy - r_outer, cx + r_outer, cy + r_outer]
    draw.ellipse(box, fill=BLACK)
    draw.ellipse([box[0] + 1, box[1] + 1, box[2] - 1, box[3] - 1], fill=rim_dark)
    if fraction > 0:
        draw.pieslice([box[0] + 1, box[1] + 1, box[2] - 1, box[3] - 1],
                      start=-90, end=-90 + 360 * fraction, fill=rim)

    # Face
    draw.ellipse([cx - r_inner - 1, cy - r_inner - 1, cx + r_inner + 1, cy + r_inner + 1], fill=BLACK)
    draw.ellipse([cx - r_inner, cy - r_inner, cx + r_inner, cy + r_inner], fill=WHITE)

    # Hand points at the elapsed fraction
    a = math.radians(360 * fraction - 90)
    hl = max(2, r_inner - int(4 * scale))
    hx, hy = int(cx + hl * math.cos(a)), int(cy + hl * math.sin(a))
    draw.line([(cx + 1, cy + 1), (hx + 1, hy + 1)], fill=GRAY, width=2)
    draw.line([(cx, cy), (hx, hy)], fill=BLACK, width=2)

    # Center hub
    draw.ellipse([cx - 3, cy - 3, cx + 3, cy + 3], fill=rim, outline=BLACK)
    return img
