"""Image storage on local disk.

Files live in one subdirectory per resource type under the upload root:

    <UPLOAD_DIR>/cars/car-<ms>-<rand>.jpg
    <UPLOAD_DIR>/brands/brand-<ms>-<rand>.png
    ...

and are served back statically under `/uploads/<type>/<filename>`; that URL is the
reference the catalog documents store (Car.images, Brand.logo, Banner.image, ...).
"""

from __future__ import annotations

import secrets
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from showroom.errors import NotFound, ValidationError
from showroom.util.time import iso_z


UPLOAD_TYPES = ("cars", "brands", "banners", "rentals")
DEFAULT_TYPE = "cars"
URL_PREFIX = "/uploads"


def _debug(msg: str) -> None:
    print(f"[upload] {msg}")


def resolve_type(upload_type: Optional[str]) -> str:
    t = (upload_type or "").strip().lower() or DEFAULT_TYPE
    if t not in UPLOAD_TYPES:
        raise ValidationError.for_field("type", f"Invalid upload type. Must be one of: {', '.join(UPLOAD_TYPES)}")
    return t


def ensure_dirs(root: str | Path) -> Path:
    base = Path(root)
    for t in UPLOAD_TYPES:
        (base / t).mkdir(parents=True, exist_ok=True)
    return base


def _checked_name(filename: str) -> str:
    name = (filename or "").strip()
    if not name or name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
        raise ValidationError.for_field("filename", "Invalid filename")
    return name


def _path(root: str | Path, upload_type: str, filename: str) -> Path:
    return Path(root) / resolve_type(upload_type) / _checked_name(filename)


def url_for(upload_type: str, filename: str) -> str:
    return f"{URL_PREFIX}/{upload_type}/{filename}"


def make_filename(upload_type: str, original_name: str) -> str:
    """`<singular type>-<epoch ms>-<random>.<ext>`; the original extension is kept."""
    prefix = upload_type[:-1] if upload_type.endswith("s") else upload_type
    ext = Path(original_name or "").suffix.lower()
    if ext and not ext[1:].isalnum():
        ext = ""
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


def _human_size(n: int) -> str:
    if n >= 1024 * 1024 and n % (1024 * 1024) == 0:
        return f"{n // (1024 * 1024)}MB"
    if n >= 1024 and n % 1024 == 0:
        return f"{n // 1024}KB"
    return f"{n} bytes"


def check_image(*, content_type: Optional[str], size: int, max_bytes: int) -> None:
    if not (content_type or "").lower().startswith("image/"):
        raise ValidationError("Only image files are allowed!")
    if size > max_bytes:
        raise ValidationError(f"File too large. Maximum size is {_human_size(max_bytes)}")


def save_image(
    root: str | Path,
    upload_type: str,
    *,
    original_name: str,
    content_type: Optional[str],
    data: bytes,
    max_bytes: int,
) -> Dict[str, Any]:
    t = resolve_type(upload_type)
    check_image(content_type=content_type, size=len(data), max_bytes=max_bytes)

    target_dir = Path(root) / t
    target_dir.mkdir(parents=True, exist_ok=True)
    filename = make_filename(t, original_name)
    (target_dir / filename).write_bytes(data)
    _debug(f"stored {t}/{filename} ({len(data)} bytes)")

    return {
        "filename": filename,
        "originalName": original_name,
        "url": url_for(t, filename),
        "size": len(data),
        "type": t,
    }


def delete_image(root: str | Path, upload_type: str, filename: str) -> Dict[str, Any]:
    path = _path(root, upload_type, filename)
    if not path.is_file():
        raise NotFound("File not found")
    path.unlink()
    _debug(f"deleted {path.parent.name}/{path.name}")
    return {"filename": path.name, "type": path.parent.name}


def image_info(root: str | Path, upload_type: str, filename: str) -> Dict[str, Any]:
    path = _path(root, upload_type, filename)
    if not path.is_file():
        raise NotFound("File not found")
    st = path.stat()
    # st_ctime is the closest portable stand-in for a birth time.
    created = datetime.fromtimestamp(st.st_ctime, tz=timezone.utc)
    modified = datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
    return {
        "filename": path.name,
        "url": url_for(path.parent.name, path.name),
        "size": st.st_size,
        "type": path.parent.name,
        "createdAt": iso_z(created),
        "modifiedAt": iso_z(modified),
    }
