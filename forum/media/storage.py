# forum/media/storage.py
import os
import re
import secrets
import logging
from typing import Iterable

from fastapi import UploadFile

log = logging.getLogger("uvicorn")

# URL pública bajo la que se sirven los ficheros subidos
UPLOADS_URL = "/uploads"

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif"}
ATTACHMENT_EXTS = {".pdf", ".doc", ".docx", ".txt", ".zip", ".rar"}

CHUNK_SIZE = 64 * 1024
_UNSAFE = re.compile(r"[^a-z0-9]")


class UploadRejected(ValueError):
    pass


def has_file(upload: UploadFile | None) -> bool:
    # un campo de fichero vacío en el form llega con filename ""
    return upload is not None and bool(upload.filename)


def safe_filename(original: str) -> str:
    """
    'Mi Foto (1).PNG' → 'mi-foto--1--<16 hex>.PNG'

    Nombre base en minúsculas, todo lo que no sea [a-z0-9] pasa a '-',
    máximo 40 caracteres, más un sufijo aleatorio para no pisar ficheros.
    """
    base = os.path.basename(original or "")
    stem, ext = os.path.splitext(base)
    stem = _UNSAFE.sub("-", stem.lower())[:40]
    return f"{stem}-{secrets.token_hex(8)}{ext}"


def save_upload(
    file: UploadFile,
    upload_dir: str,
    *,
    allowed_exts: set[str],
    max_bytes: int,
    kind: str = "file",
) -> str:
    """
    Copia el UploadFile a `upload_dir` y devuelve la ruta pública
    (p. ej. '/uploads/foto-3f2a....png'). Si falla no deja nada en disco.
    """
    ext = os.path.splitext(file.filename or "")[1].lower()
    if ext not in allowed_exts:
        allowed = ", ".join(sorted(e.lstrip(".") for e in allowed_exts))
        raise UploadRejected(f"invalid {kind} type, allowed: {allowed}")

    os.makedirs(upload_dir, exist_ok=True)
    name = safe_filename(file.filename)
    abs_path = os.path.join(upload_dir, name)

    written = 0
    try:
        with open(abs_path, "wb") as out:
            while True:
                chunk = file.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise UploadRejected(f"{kind} is too large (max {max_bytes} bytes)")
                out.write(chunk)
    except BaseException:
        _remove(abs_path)
        raise

    return f"{UPLOADS_URL}/{name}"


def save_image(file: UploadFile, upload_dir: str, max_bytes: int) -> str:
    return save_upload(file, upload_dir, allowed_exts=IMAGE_EXTS, max_bytes=max_bytes, kind="image")


def save_attachment(file: UploadFile, upload_dir: str, max_bytes: int) -> str:
    return save_upload(file, upload_dir, allowed_exts=ATTACHMENT_EXTS, max_bytes=max_bytes, kind="attachment")


def _remove(abs_path: str) -> None:
    try:
        os.remove(abs_path)
    except FileNotFoundError:
        pass


def delete_uploads(paths: Iterable[str], upload_dir: str) -> None:
    """
    Borra ficheros ya escritos (rutas públicas /uploads/...).
    No lanza error si ya no están; solo se registra si el borrado falla.
    """
    for public in paths:
        name = os.path.basename(public)
        if not name:
            continue
        abs_path = os.path.join(upload_dir, name)
        try:
            _remove(abs_path)
        except OSError:
            log.warning(f"⚠️ no se pudo borrar {abs_path}", exc_info=True)
