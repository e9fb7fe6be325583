from fastapi import APIRouter, Depends, File, UploadFile
from typing import Optional
from starlette.concurrency import run_in_threadpool

from autotruth.dependencies import get_analyzer
from autotruth.models.analysis import UploadedFile
from autotruth.services.analyzer import ContractAnalyzer
from autotruth.services.validator import is_supported_media_type

router = APIRouter()


async def _to_uploaded_file(file: Optional[UploadFile], max_bytes: int) -> Optional[UploadedFile]:
    # browsers send an empty, nameless part when nothing was picked
    if file is None or not file.filename:
        return None

    content_type = file.content_type or ""
    if (file.size is not None and file.size > max_bytes) or not is_supported_media_type(content_type):
        # the validator rejects these, so the body is never pulled into memory
        return UploadedFile(content=b"", size=file.size or 0, content_type=content_type, filename=file.filename)

    content = await file.read()
    return UploadedFile(
        content=content,
        size=file.size if file.size is not None else len(content),
        content_type=content_type,
        filename=file.filename,
    )


@router.post("/analyze")
async def analyze_contract(
    file: Optional[UploadFile] = File(None),
    analyzer: ContractAnalyzer = Depends(get_analyzer),
):
    """Analyze an uploaded car purchase contract (image or PDF)"""
    upload = await _to_uploaded_file(file, analyzer.max_bytes)
    outcome = await run_in_threadpool(analyzer.analyze, upload)
    return outcome.to_response()
