"""Wrap a character grid in a standalone HTML page that scales to the window."""

import html
from typing import Sequence

DEFAULT_TITLE = "ASCII Art Viewer"

# Width of a monospace glyph relative to its font size.
FONT_ASPECT_RATIO = 0.6

# Row pitch of the <pre>, in ems.
LINE_HEIGHT_EM = 0.8


def escape_art(lines: Sequence[str]) -> str:
    """Escape the art for use inside <pre>, quotes included."""
    return html.escape("\n".join(lines), quote=True)


def render_html(
    lines: Sequence[str],
    background: str,
    foreground: str,
    title: str = DEFAULT_TITLE,
) -> str:
    """
    Build the viewer document.

    The <pre> starts at a fixed 10px; a small script then picks the largest
    font size at which every column fits the window width and every row fits
    the window height, and repeats that on resize.
    """
    rows = len(lines)
    cols = max((len(ln) for ln in lines), default=0)

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n'
        '  <meta charset="UTF-8">\n'
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"  <title>{html.escape(title)}</title>\n"
        "  <style>\n"
        "    html, body {\n"
        "      margin: 0;\n"
        "      padding: 0;\n"
        "      width: 100%;\n"
        "      height: 100%;\n"
        "      display: flex;\n"
        "      justify-content: center;\n"
        "      align-items: center;\n"
        f"      background-color: {background};\n"
        "      overflow: hidden;\n"
        "    }\n"
        "    pre {\n"
        "      margin: 0;\n"
        f"      color: {foreground};\n"
        "      font-family: 'Courier New', Courier, monospace;\n"
        "      font-variant-ligatures: none;\n"
        "      white-space: pre;\n"
        "      font-size: 10px;\n"
        f"      line-height: {LINE_HEIGHT_EM}em;\n"
        "    }\n"
        "  </style>\n"
        "</head>\n<body>\n"
        f'<pre id="ascii-art">{escape_art(lines)}</pre>\n'
        "<script>\n"
        "  (function() {\n"
        "    const artElement = document.getElementById('ascii-art');\n"
        f"    const artCols = {max(cols, 1)};\n"
        f"    const artRows = {max(rows, 1)};\n"
        f"    const FONT_ASPECT_RATIO = {FONT_ASPECT_RATIO};\n"
        "    function resizeArt() {\n"
        "      const fontSizeForWidth = (window.innerWidth / artCols) / FONT_ASPECT_RATIO;\n"
        f"      const fontSizeForHeight = window.innerHeight / (artRows * {LINE_HEIGHT_EM});\n"
        "      artElement.style.fontSize = Math.min(fontSizeForWidth, fontSizeForHeight) + 'px';\n"
        "    }\n"
        "    window.addEventListener('resize', resizeArt);\n"
        "    document.addEventListener('DOMContentLoaded', resizeArt);\n"
        "    resizeArt();\n"
        "  })();\n"
        "</script>\n"
        "</body>\n</html>\n"
    )
