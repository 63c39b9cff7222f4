"""
Storage abstraction for uploaded product images: local directory and in-memory testing.
"""

from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


class ImageStorage(Protocol):
    """Defines the operations the API needs from image storage."""

    def save(self, filename: str, data: bytes) -> str:
        """Store ``data`` and return the public URL it is served under."""
        ...


def make_upload_filename(original_name: str | None, content_type: str) -> str:
    """Timestamped random name, keeping the original extension when there is one."""
    ext = os.path.splitext(original_name or "")[1].lower() or ALLOWED_IMAGE_TYPES.get(
        content_type, ""
    )
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


@dataclass
class InMemoryImageStorage:
    """Test double for image uploads."""

    base_url: str = "/uploads"
    stored_objects: dict[str, bytes] = field(default_factory=dict)

    def save(self, filename: str, data: bytes) -> str:
        self.stored_objects[filename] = data
        return f"{self.base_url}/{filename}"


@dataclass
class LocalImageStorage:
    """
    Writes uploads into a directory that the app serves at ``base_url``.
    """

    directory: str
    base_url: str = "/uploads"

    def __post_init__(self):
        Path(self.directory).mkdir(parents=True, exist_ok=True)

    def save(self, filename: str, data: bytes) -> str:
        path = Path(self.directory) / filename
        path.write_bytes(data)
        return f"{self.base_url}/{filename}"
