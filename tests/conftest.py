"""Shared fixtures: small images synthesised with Pillow."""

import io

import pytest
from PIL import Image


def encode(img: Image.Image, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def black_png():
    return encode(Image.new("RGB", (2, 2), color=(0, 0, 0)))


@pytest.fixture
def white_png():
    return encode(Image.new("RGB", (4, 4), color=(255, 255, 255)))


@pytest.fixture
def gradient_png():
    """64x32 horizontal grey ramp, black on the left."""
    img = Image.new("L", (64, 32))
    img.putdata([x * 4 for _ in range(32) for x in range(64)])
    return encode(img)


@pytest.fixture
def noisy_png():
    img = Image.effect_noise((128, 128), 64).convert("RGB")
    return encode(img)


@pytest.fixture
def make_image_bytes():
    """Factory: make_image_bytes(size, color, mode="RGB", fmt="PNG")."""

    def _make(size, color, mode="RGB", fmt="PNG"):
        return encode(Image.new(mode, size, color=color), fmt)

    return _make
