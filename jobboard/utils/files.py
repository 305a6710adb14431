import os
import time
import random
import logging
from typing import Optional

from fastapi import UploadFile, HTTPException, status

from jobboard.utils.config import Config

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx"}
ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
PUBLIC_PREFIX = "/uploads/resumes"


class ResumeFile:
    """A validated upload held in memory until the resume row is ready to reference it."""

    def __init__(self, extension: str, content: bytes):
        self.extension = extension
        self.content = content
        self.path: Optional[str] = None

    @property
    def url(self) -> Optional[str]:
        if self.path is None:
            return None
        return f"{PUBLIC_PREFIX}/{os.path.basename(self.path)}"

    def save(self, upload_dir: str = None) -> str:
        upload_dir = upload_dir or Config.UPLOAD_DIR
        os.makedirs(upload_dir, exist_ok=True)
        filename = f"resume-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{self.extension}"
        self.path = os.path.join(upload_dir, filename)
        with open(self.path, "wb") as fh:
            fh.write(self.content)
        logger.info(f"Stored resume file {filename} ({len(self.content)} bytes)")
        return self.url

    def discard(self):
        if self.path and os.path.exists(self.path):
            os.remove(self.path)
            logger.info(f"Removed resume file {self.path}")
        self.path = None


async def read_resume_file(file: Optional[UploadFile]) -> Optional[ResumeFile]:
    """Check type and size of an uploaded resume. Nothing is written to disk here."""
    if file is None or not file.filename:
        return None

    extension = os.path.splitext(file.filename)[1].lower()
    if extension not in ALLOWED_EXTENSIONS or file.content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF, DOC, and DOCX files are allowed",
        )

    max_bytes = Config.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    content = await file.read()
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large. Maximum size is {Config.MAX_UPLOAD_SIZE_MB}MB",
        )
    return ResumeFile(extension, content)
