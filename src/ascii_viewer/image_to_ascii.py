#!/usr/bin/env python3
"""Convert raster images to ASCII art as plain text and an HTML viewer."""

import argparse
import io
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from PIL import Image

from .errors import AsciiViewerError, DecodeError
from .html_viewer import DEFAULT_TITLE, render_html

LOG = logging.getLogger(__name__)

# -----------------------------
# Ramps / themes
# -----------------------------

# Sparse -> dense. Index 0 is used for the darkest pixels on a dark background.
SIMPLE_CHARS = " .:-=+*#%@"
DETAILED_CHARS = (
    " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"
)

DEFAULT_WIDTH = 150

# Monospace cells are roughly twice as tall as they are wide.
ASPECT_RATIO_CORRECTION = 0.5


@dataclass(frozen=True)
class ThemeStyle:
    background: str
    foreground: str
    invert: bool


THEMES = {
    "dark": ThemeStyle(background="#1a1a1a", foreground="#e0e0e0", invert=False),
    "light": ThemeStyle(background="#f0f0f0", foreground="#111111", invert=True),
}


def charset_for(detailed: bool) -> str:
    return DETAILED_CHARS if detailed else SIMPLE_CHARS


# -----------------------------
# Data model
# -----------------------------


@dataclass(frozen=True)
class ConversionRequest:
    data: bytes
    theme: str = "dark"
    detailed: bool = False
    full_resolution: bool = False
    width: int = DEFAULT_WIDTH

    def __post_init__(self):
        if self.theme not in THEMES:
            raise ValueError(f"unknown theme: {self.theme}")
        if self.width < 1:
            raise ValueError(f"width must be at least 1, got {self.width}")


@dataclass(frozen=True)
class ConversionResult:
    text: str
    html: str
    columns: int
    rows: int


# -----------------------------
# Decode / resample
# -----------------------------


def decode_image(data: bytes) -> Image.Image:
    """Decode ``data`` fully, raising DecodeError for anything Pillow rejects."""
    try:
        img = Image.open(io.BytesIO(data))
        # Image.open is lazy; force the pixel data so truncation fails here.
        img.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    LOG.debug("Decoded %s image %dx%d (mode=%s)", img.format, img.width, img.height, img.mode)
    return img


def target_size(width: int, height: int, columns: int) -> tuple[int, int]:
    rows = max(1, round(columns * height / width * ASPECT_RATIO_CORRECTION))
    return columns, rows


def resize_for_ascii(img: Image.Image, columns: int = DEFAULT_WIDTH) -> Image.Image:
    """Resize to ``columns`` wide, halving the height for the glyph aspect."""
    size = target_size(img.width, img.height, columns)
    LOG.debug("Resizing %dx%d -> %dx%d", img.width, img.height, *size)
    return img.resize(size, resample=Image.Resampling.LANCZOS)


def to_luma8(img: Image.Image) -> Image.Image:
    """
    Grey ``L`` image of ``img``.

    Pillow's own ``convert("L")`` clips 16/32-bit integer samples at 255, so
    those are scaled down to 8 bits (``v >> 8``, clipped to 16 bits) first.
    ``F`` images follow Pillow's 0..255 convention and are left to convert.
    """
    if img.mode.startswith("I;16") or img.mode == "I":
        wide = np.clip(np.asarray(img).astype(np.int64), 0, 0xFFFF)
        return Image.fromarray((wide >> 8).astype(np.uint8))
    return img.convert("L")


def to_pixel_grid(
    img: Image.Image, width: int = DEFAULT_WIDTH, full_resolution: bool = False
) -> np.ndarray:
    """
    Return a read-only rows x cols uint8 luminance array.

    Luminance is Pillow's ``L`` conversion (ITU-R 601-2:
    ``R*299/1000 + G*587/1000 + B*114/1000``), taken before resizing.
    16-bit greyscale is scaled down, see ``to_luma8``.
    """
    gray = to_luma8(img)
    if full_resolution:
        LOG.info("Using full resolution (%dx%d)", gray.width, gray.height)
    else:
        LOG.info("Resizing image to width: %d", width)
        gray = resize_for_ascii(gray, width)

    grid = np.asarray(gray, dtype=np.uint8).copy()
    grid.setflags(write=False)
    return grid


# -----------------------------
# Glyph mapping
# -----------------------------


def glyph_indices(grid: np.ndarray, ramp_len: int, invert: bool = False) -> np.ndarray:
    """floor(L * n / 256), clamped to the ramp, mirrored when ``invert``."""
    idx = (grid.astype(np.int64) * ramp_len) // 256
    idx = np.clip(idx, 0, ramp_len - 1)
    if invert:
        idx = (ramp_len - 1) - idx
    return idx


def _check_ramp(ramp: str) -> None:
    if not ramp:
        raise ValueError("ramp must contain at least one character")


def pixel_to_char(value: int, ramp: str, theme: str = "dark") -> str:
    _check_ramp(ramp)
    idx = min(max(int(value) * len(ramp) // 256, 0), len(ramp) - 1)
    if THEMES[theme].invert:
        idx = len(ramp) - 1 - idx
    return ramp[idx]


def map_to_glyphs(grid: np.ndarray, ramp: str, theme: str = "dark") -> List[str]:
    _check_ramp(ramp)
    chars = np.array(list(ramp))
    idx = glyph_indices(grid, len(ramp), invert=THEMES[theme].invert)
    return ["".join(row) for row in chars[idx]]


def render_text(lines: Sequence[str]) -> str:
    return "\n".join(lines)


# -----------------------------
# Pipeline
# -----------------------------


def convert(request: ConversionRequest, title: str = DEFAULT_TITLE) -> ConversionResult:
    """decode -> (resize) -> map -> serialise. Raises DecodeError on bad bytes."""
    style = THEMES[request.theme]

    img = decode_image(request.data)
    grid = to_pixel_grid(img, width=request.width, full_resolution=request.full_resolution)
    lines = map_to_glyphs(grid, charset_for(request.detailed), theme=request.theme)

    rows, columns = grid.shape
    LOG.debug(
        "Rendered %dx%d grid (theme=%s detailed=%s)",
        columns,
        rows,
        request.theme,
        request.detailed,
    )

    return ConversionResult(
        text=render_text(lines),
        html=render_html(lines, style.background, style.foreground, title=title),
        columns=columns,
        rows=rows,
    )


# -----------------------------
# CLI
# -----------------------------


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Convert an image to ASCII art (plain text or HTML viewer)"
    )
    ap.add_argument("input", help="Input image path")
    ap.add_argument(
        "-o", "--output", default=None, help="Output file (default: stdout)"
    )
    ap.add_argument(
        "--format",
        choices=["text", "html"],
        default=None,
        help="Output format (default: inferred from output extension, else text)",
    )
    ap.add_argument(
        "-w",
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help="Output columns (characters wide)",
    )
    ap.add_argument(
        "--theme",
        choices=sorted(THEMES),
        default="dark",
        help="dark = light glyphs on dark background; light = the reverse",
    )
    ap.add_argument(
        "--detailed",
        action="store_true",
        help="Use the 70-character ramp instead of the 10-character one",
    )
    ap.add_argument(
        "--full-resolution",
        action="store_true",
        help="One character per pixel; ignores --width",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )
    return ap


def infer_format(out_format: Optional[str], out_path: Optional[str]) -> str:
    if out_format is not None:
        return out_format
    if out_path and os.path.splitext(out_path)[1].lower() in (".html", ".htm"):
        return "html"
    return "text"


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    if args.width < 1:
        parser.error("--width must be at least 1")

    try:
        with open(args.input, "rb") as f:
            data = f.read()
    except OSError as e:
        parser.error(f"cannot read {args.input}: {e.strerror or e}")

    title = os.path.splitext(os.path.basename(args.input))[0] or DEFAULT_TITLE
    request = ConversionRequest(
        data=data,
        theme=args.theme,
        detailed=args.detailed,
        full_resolution=args.full_resolution,
        width=args.width,
    )

    try:
        result = convert(request, title=title)
    except AsciiViewerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    out_format = infer_format(args.format, args.output)
    output = result.html if out_format == "html" else result.text + "\n"

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        LOG.info("Wrote %s output to %s", out_format, args.output)
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
