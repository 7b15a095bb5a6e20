# utils/uploads.py
import os
import secrets
import time

from werkzeug.utils import secure_filename

ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "svg"}


class UploadError(ValueError):
    """The file was rejected; nothing has been written."""


def allowed_file(filename: str) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def _file_size(file) -> int:
    stream = file.stream
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def unique_filename(original: str) -> str:
    """``<epoch ms>-<16 hex chars>-<sanitized stem>.<extension>``

    Only the stem goes through ``secure_filename``, which drops non-ASCII
    characters; the extension is kept so the file is served with its type.
    """
    stem, _, ext = original.rpartition(".") if "." in original else (original, "", "")
    name = f"{int(time.time() * 1000)}-{secrets.token_hex(8)}-{secure_filename(stem) or 'upload'}"
    ext = secure_filename(ext).lower()
    return f"{name}.{ext}" if ext else name


def save_upload(file, upload_dir: str, max_bytes: int) -> str:
    """
    Validate and store an uploaded image.
    Returns the public URL path (``/uploads/<name>``). Raises UploadError
    before touching the disk when the file is missing, not an allowed image
    type, or larger than ``max_bytes``.
    """
    if file is None or not file.filename:
        raise UploadError("No file uploaded")
    if not allowed_file(file.filename):
        raise UploadError("Only image files are allowed!")
    if _file_size(file) > max_bytes:
        raise UploadError(f"File too large (max {max_bytes // (1024 * 1024)}MB)")

    os.makedirs(upload_dir, exist_ok=True)
    filename = unique_filename(file.filename)
    file.save(os.path.join(upload_dir, filename))
    return f"/uploads/{filename}"
