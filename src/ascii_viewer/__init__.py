"""ASCII Viewer - turn uploaded images into ASCII art text and HTML viewers."""

__version__ = "0.1.0"

"""
Entry points are thin lazy wrappers so `python -m ascii_viewer.<module>` does
not find its own module already in `sys.modules` (runpy warns about that).
"""


def image_to_ascii_main(*args, **kwargs):
    from .image_to_ascii import main as _m

    return _m(*args, **kwargs)


def serve_main(*args, **kwargs):
    from .web import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "image_to_ascii_main",
    "serve_main",
]
