"""
Gallery Component Utility Functions.

Image URL construction, blurhash placeholder decoding and display helpers
shared by the gallery, the profile page and the upload preview.
"""

import base64
from functools import lru_cache
from io import BytesIO
from urllib.parse import urlparse

import blurhash
from cloudinary.utils import cloudinary_url
from PIL import Image

from artprints.configs.config import settings
from artprints.configs.logging_init import logger

CLOUDINARY_HOST = "res.cloudinary.com"


def card_dom_id(mount_id: str, position: int) -> str:
    """DOM id of the card at ``position``; the sentinel observes the last one."""
    return f"gallery-card-{mount_id}-{position}"


def build_image_url(image_url: str, width: int | None = None) -> str:
    """
    Build the delivery URL for an artwork image.

    External images go through a Cloudinary fetch URL (resized, auto format)
    when a cloud is configured. Images already on the Cloudinary CDN, and
    every image when no cloud is configured, are returned unchanged.
    """
    cloud_name = settings.cloudinary.cloud_name
    if not cloud_name or not image_url:
        return image_url

    if urlparse(image_url).netloc == CLOUDINARY_HOST:
        return image_url

    url, _ = cloudinary_url(
        image_url,
        type="fetch",
        cloud_name=cloud_name,
        secure=settings.cloudinary.secure,
        width=width or settings.cloudinary.thumbnail_width,
        crop="limit",
        fetch_format="auto",
        quality="auto",
    )
    return url


@lru_cache(maxsize=512)
def blurhash_data_uri(hash_str: str, size: int = 32) -> str | None:
    """
    Decode a blurhash into a PNG data URI usable as an <img> source.

    Returns:
        The data URI, or None if the hash cannot be decoded
    """
    try:
        pixels = blurhash.decode(hash_str, size, size)
    except (ValueError, IndexError) as e:
        logger.debug(f"Invalid blurhash {hash_str!r}: {e}")
        return None

    image = Image.new("RGB", (size, size))
    image.putdata(
        [
            tuple(max(0, min(255, int(channel))) for channel in pixel)
            for row in pixels
            for pixel in row
        ]
    )

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def format_price(price: float | None, currency: str | None = None) -> str | None:
    if price is None:
        return None
    currency = currency or settings.gallery.currency
    return f"{currency} {price:,.2f}"
