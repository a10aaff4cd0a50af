from __future__ import annotations
import mimetypes
from pathlib import Path
from typing import Mapping

# Image types are pinned so data URIs do not depend on the host mimetypes db.
IMAGE_MIME_TYPES: Mapping[str, str] = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.bmp': 'image/bmp',
    '.webp': 'image/webp',
}

DEFAULT_MIME: str = 'application/octet-stream'


def mime_for_path(path: Path | str) -> str:
    """Return the MIME type used in data URIs for *path*.

    Known image suffixes come from IMAGE_MIME_TYPES (case-insensitive);
    anything else is guessed, then defaults to application/octet-stream.
    """
    suffix = Path(path).suffix.lower()
    if suffix in IMAGE_MIME_TYPES:
        return IMAGE_MIME_TYPES[suffix]
    guessed, _enc = mimetypes.guess_type(f'file{suffix}')
    return guessed or DEFAULT_MIME
