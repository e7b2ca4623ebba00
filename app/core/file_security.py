# app/core/file_security.py
import os
from fastapi import UploadFile, HTTPException, status

ALLOWED_MIME_PREFIXES = ("image/", "video/")

def validate_mime_type(file: UploadFile) -> None:
    """Accept images and videos only"""
    content_type = file.content_type or ""
    if not content_type.startswith(ALLOWED_MIME_PREFIXES):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type: {content_type or 'unknown'}"
        )

def sanitize_filename(filename: str | None) -> str:
    """Make an uploaded filename safe for a storage path"""
    filename = os.path.basename(filename or "")  # strip directories
    filename = filename.replace(" ", "_")

    name, ext = os.path.splitext(filename)

    # letters, digits, underscore and hyphen only
    safe_name = "".join(c for c in name if c.isalnum() or c in "_-")
    safe_ext = "".join(c for c in ext if c.isalnum() or c == ".")

    if len(safe_name) > 50:
        safe_name = safe_name[:50]

    if not safe_name:
        safe_name = "upload"

    return f"{safe_name}{safe_ext.lower()}"
