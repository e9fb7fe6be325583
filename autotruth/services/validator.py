from typing import Optional

from autotruth.config import MAX_UPLOAD_BYTES
from autotruth.models.analysis import UploadedFile
from autotruth.services.errors import FileTooLargeError, MissingFileError, UnsupportedTypeError

PDF_MEDIA_TYPE = "application/pdf"


def is_supported_media_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and (content_type.startswith("image/") or content_type == PDF_MEDIA_TYPE)


def format_limit(max_bytes: int) -> str:
    mib = 1024 * 1024
    if max_bytes % mib == 0:
        return f"{max_bytes // mib}MB"
    if max_bytes >= mib:
        return f"{max_bytes / mib:.1f}MB"
    return f"{max_bytes} bytes"


def validate_upload(upload: Optional[UploadedFile], max_bytes: int = MAX_UPLOAD_BYTES) -> UploadedFile:
    """
    Check an upload before any expensive work is done.

    Rules run in order (presence, size, media type) and the first one
    that fails raises.

    Returns:
        The same upload, for chaining
    """
    if upload is None:
        raise MissingFileError("No file provided")

    if upload.size > max_bytes:
        raise FileTooLargeError(f"File size exceeds {format_limit(max_bytes)} limit")

    if not is_supported_media_type(upload.content_type):
        raise UnsupportedTypeError("Only image and PDF files are supported")

    return upload
