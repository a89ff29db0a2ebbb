"""
File Upload Utility - validate and encode resume files.

Resumes are stored on the profile document as base64, next to their
file name, MIME type and size; industry users download them as-is.

Supported formats: PDF (.pdf), Word (.doc, .docx)
Max file size: settings.resume_max_size_mb
"""

import base64
from dataclasses import dataclass
from fastapi import UploadFile, HTTPException

from app.core.config import get_settings

settings = get_settings()

ALLOWED_EXTENSIONS = {
    '.pdf': 'application/pdf',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
}


@dataclass
class EncodedFile:
    filename: str
    file_type: str
    size: int
    base64_data: str


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def encode_resume(filename: str, content: bytes, max_size_bytes: int) -> EncodedFile:
    """
    Validate a resume file and base64-encode it.

    Raises:
        HTTPException 400 on bad name/type/empty file, 413 when too large
    """
    if not filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: PDF, DOC, DOCX"
        )

    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    if len(content) > max_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {max_size_bytes // (1024 * 1024)}MB"
        )

    return EncodedFile(
        filename=filename,
        file_type=ALLOWED_EXTENSIONS[ext],
        size=len(content),
        base64_data=base64.b64encode(content).decode("ascii")
    )


async def read_resume_upload(file: UploadFile) -> EncodedFile:
    """Read a FastAPI upload and encode it (see encode_resume)."""
    content = await file.read()
    return encode_resume(file.filename or "", content, settings.resume_max_size_bytes)
