from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from showroom.auth import require_admin
from showroom.config import Config
from showroom.errors import ValidationError
from showroom.uploads import storage

from .deps import get_cfg, ok


router = APIRouter(prefix="/upload", tags=["upload"])


def _read_bounded(upload: UploadFile, max_bytes: int) -> bytes:
    # One byte past the ceiling is enough to know the file is too large.
    return upload.file.read(max_bytes + 1)


@router.get("")
def upload_help() -> Dict[str, Any]:
    types = "|".join(storage.UPLOAD_TYPES)
    return ok(
        message="Upload API is working",
        endpoints={
            "single": f"POST /upload/single?type={types}",
            "multiple": f"POST /upload/multiple?type={types}",
            "delete": "DELETE /upload/:type/:filename",
            "info": "GET /upload/info/:type/:filename",
        },
    )


@router.post("/single")
def upload_single(
    upload_type: Optional[str] = Query(None, alias="type"),
    image: Optional[UploadFile] = File(None),
    cfg: Config = Depends(get_cfg),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    upload_type = storage.resolve_type(upload_type)
    if image is None or not image.filename:
        raise ValidationError("No file uploaded")

    data = _read_bounded(image, cfg.UPLOAD_MAX_BYTES)
    info = storage.save_image(
        cfg.UPLOAD_DIR,
        upload_type,
        original_name=image.filename,
        content_type=image.content_type,
        data=data,
        max_bytes=cfg.UPLOAD_MAX_BYTES,
    )
    return ok(info, message="Image uploaded successfully")


@router.post("/multiple")
def upload_multiple(
    upload_type: Optional[str] = Query(None, alias="type"),
    images: Optional[List[UploadFile]] = File(None),
    cfg: Config = Depends(get_cfg),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    upload_type = storage.resolve_type(upload_type)
    files = [f for f in (images or []) if f.filename]
    if not files:
        raise ValidationError("No files uploaded")
    if len(files) > cfg.UPLOAD_MAX_FILES:
        raise ValidationError(f"Too many files. Maximum is {cfg.UPLOAD_MAX_FILES}")

    # Validate the whole batch before writing anything.
    batch = []
    for f in files:
        data = _read_bounded(f, cfg.UPLOAD_MAX_BYTES)
        storage.check_image(content_type=f.content_type, size=len(data), max_bytes=cfg.UPLOAD_MAX_BYTES)
        batch.append((f, data))

    saved = [
        storage.save_image(
            cfg.UPLOAD_DIR,
            upload_type,
            original_name=f.filename,
            content_type=f.content_type,
            data=data,
            max_bytes=cfg.UPLOAD_MAX_BYTES,
        )
        for f, data in batch
    ]
    for item in saved:
        item.pop("type", None)
    return ok(saved, message=f"{len(saved)} images uploaded successfully", type=upload_type)


@router.get("/info/{upload_type}/{filename}")
def image_info(upload_type: str, filename: str, cfg: Config = Depends(get_cfg)) -> Dict[str, Any]:
    return ok(storage.image_info(cfg.UPLOAD_DIR, upload_type, filename))


@router.get("/info/{filename}")
def image_info_legacy(filename: str, cfg: Config = Depends(get_cfg)) -> Dict[str, Any]:
    return ok(storage.image_info(cfg.UPLOAD_DIR, storage.DEFAULT_TYPE, filename))


@router.delete("/{upload_type}/{filename}")
def delete_image(
    upload_type: str,
    filename: str,
    cfg: Config = Depends(get_cfg),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    info = storage.delete_image(cfg.UPLOAD_DIR, upload_type, filename)
    return ok(info, message="File deleted successfully")


@router.delete("/{filename}")
def delete_image_legacy(
    filename: str,
    cfg: Config = Depends(get_cfg),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    info = storage.delete_image(cfg.UPLOAD_DIR, storage.DEFAULT_TYPE, filename)
    return ok(info, message="Image deleted successfully")
