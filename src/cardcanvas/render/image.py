"""Image loading and encoding using Pillow."""

import logging
import threading
from io import BytesIO
from pathlib import Path
from typing import Callable, Union
from urllib.parse import urlparse

import requests
from PIL import Image, UnidentifiedImageError

from cardcanvas.config import FetchConfig
from cardcanvas.errors import EncodeError, LoadError

logger = logging.getLogger(__name__)

# Anything a draw call accepts as an image
ImageSource = Union[Image.Image, bytes, str, Path]
ImageLoaderFunc = Callable[[ImageSource], Image.Image]


def is_url(value: str) -> bool:
    """True if value is an absolute http(s) URL with a host."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_image_from_bytes(image_data: bytes) -> Image.Image:
    """
    Decode raw image bytes into an RGBA image.

    Args:
        image_data: Raw image bytes (JPEG, PNG, etc.).

    Returns:
        Fully loaded PIL Image in RGBA mode.

    Raises:
        LoadError: If the bytes aren't a decodable image.
    """
    try:
        img = Image.open(BytesIO(image_data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise LoadError(f"Could not decode image data: {e}") from e

    # Convert so every draw composites with an alpha channel
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img


def save_image_to_bytes(img: Image.Image, format: str = "PNG") -> bytes:
    """
    Save PIL Image to bytes.

    Args:
        img: PIL Image object.
        format: Image format (PNG, JPEG, etc.).

    Returns:
        Image as bytes.

    Raises:
        EncodeError: If Pillow fails to encode the image.
    """
    buffer = BytesIO()
    try:
        img.save(buffer, format=format)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode image as {format}: {e}") from e
    return buffer.getvalue()


class ImageLoader:
    """Loads images from Pillow objects, raw bytes, file paths or http(s) URLs."""

    def __init__(self, config: FetchConfig | None = None, session: requests.Session | None = None) -> None:
        """
        Initialize the loader.

        Args:
            config: Fetch settings (timeout, user agent, size cap). Defaults are used when None.
            session: Session to use from every thread. When None, each thread
                gets its own requests session on first fetch.
        """
        self.config = config or FetchConfig()
        self._shared_session = session
        self._local = threading.local()
        if session is not None:
            session.headers.setdefault("User-Agent", self.config.user_agent)

    @property
    def session(self) -> requests.Session:
        """The requests session for the calling thread."""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = self.config.user_agent
            self._local.session = session
        return session

    def __call__(self, source: ImageSource) -> Image.Image:
        return self.load(source)

    def load(self, source: ImageSource) -> Image.Image:
        """
        Load and decode an image source.

        Args:
            source: PIL Image, raw bytes, filesystem path or http(s) URL.

        Returns:
            RGBA PIL Image.

        Raises:
            LoadError: If the source can't be fetched, read or decoded.
        """
        if isinstance(source, Image.Image):
            return source if source.mode == "RGBA" else source.convert("RGBA")
        if isinstance(source, (bytes, bytearray)):
            return load_image_from_bytes(bytes(source))
        if isinstance(source, str) and is_url(source):
            return load_image_from_bytes(self.fetch(source))
        if isinstance(source, (str, Path)):
            return load_image_from_bytes(self._read_file(Path(source)))
        raise LoadError(f"Unsupported image source type: {type(source).__name__}")

    def fetch(self, url: str) -> bytes:
        """
        Download raw bytes from a URL.

        Raises:
            LoadError: On network failure, an HTTP error status or a body larger
                than the configured max_bytes.
        """
        logger.info(f"Fetching image: {url}")
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LoadError(f"Failed to fetch image {url}: {e}") from e

        content = response.content
        if len(content) > self.config.max_bytes:
            raise LoadError(
                f"Image at {url} is {len(content)} bytes, over the {self.config.max_bytes} byte limit"
            )
        return content

    @staticmethod
    def _read_file(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise LoadError(f"Failed to read image file {path}: {e}") from e


_default_loader: ImageLoader | None = None


def load_image(source: ImageSource) -> Image.Image:
    """Load an image with a shared default-configured ImageLoader."""
    global _default_loader
    if _default_loader is None:
        _default_loader = ImageLoader()
    return _default_loader.load(source)
