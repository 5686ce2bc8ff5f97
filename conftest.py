"""Shared pytest fixtures for the cardcanvas test suite.

Fixtures:
    solid_image: Factory for in-memory single-color RGBA images
    split_image: Factory for images whose left half and right half differ in color
    dict_loader: Image loader resolving sources from an in-memory mapping
    failing_loader: Image loader that always raises LoadError
"""

from typing import Callable

import pytest
from PIL import Image

from cardcanvas.errors import LoadError


@pytest.fixture
def solid_image() -> Callable[..., Image.Image]:
    def make(color: tuple[int, int, int, int] = (0, 128, 0, 255), size: tuple[int, int] = (100, 100)) -> Image.Image:
        return Image.new("RGBA", size, color)

    return make


@pytest.fixture
def split_image() -> Callable[..., Image.Image]:
    def make(
        size: tuple[int, int] = (200, 100),
        left_color: tuple[int, int, int, int] = (255, 0, 0, 255),
        right_color: tuple[int, int, int, int] = (0, 0, 255, 255),
    ) -> Image.Image:
        width, height = size
        img = Image.new("RGBA", size, left_color)
        img.paste(Image.new("RGBA", (width // 2, height), right_color), (width // 2, 0))
        return img

    return make


@pytest.fixture
def dict_loader(solid_image):
    """Loader that serves images by key and raises LoadError for unknown keys."""
    images = {
        "https://img.example/avatar.png": solid_image((200, 40, 40, 255), (300, 300)),
        "https://img.example/landscape.png": solid_image((40, 80, 200, 255), (1280, 720)),
    }
    calls: list = []

    def load(source):
        calls.append(source)
        if isinstance(source, Image.Image):
            return source
        try:
            return images[source]
        except KeyError:
            raise LoadError(f"Unknown image: {source}")

    load.images = images
    load.calls = calls
    return load


@pytest.fixture
def failing_loader():
    def load(source):
        raise LoadError(f"Failed to fetch image {source}: connection refused")

    return load
