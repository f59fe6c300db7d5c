"""
Extraction routes: ingest a URL or an uploaded file.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from .classifier import is_allowed_file_type
from .config import get_extractor
from .exceptions import InvalidInputError
from .extractor import ContentExtractor
from .hashing import hash_file, hash_url
from .schemas import ExtractUrlRequest, ExtractedMetadataResponse

router = APIRouter(tags=["extraction"])


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.post("/extract/url", response_model=ExtractedMetadataResponse, response_model_exclude_none=True)
async def extract_url(
    request: ExtractUrlRequest,
    extractor: Annotated[ContentExtractor, Depends(get_extractor)],
):
    """Extract metadata and content for a URL."""
    try:
        metadata = await extractor.extract_from_url(request.url, use_cache=request.use_cache)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return JSONResponse(
        content=metadata.to_dict(),
        headers={"X-Content-Hash": hash_url(request.url)},
    )


@router.post("/extract/file", response_model=ExtractedMetadataResponse, response_model_exclude_none=True)
async def extract_file(
    extractor: Annotated[ContentExtractor, Depends(get_extractor)],
    file: UploadFile = File(...),
):
    """Extract metadata and content from an uploaded document (PDF, EPUB, DOCX, MD, HTML, TXT)."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    if not is_allowed_file_type(file.filename, file.content_type):
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported file type: {file.filename}",
        )

    data = await file.read()
    metadata = await extractor.extract_from_file(data, file.filename, file.content_type)

    return JSONResponse(
        content=metadata.to_dict(),
        headers={"X-Content-Hash": hash_file(data)},
    )


@router.post("/cache/clear")
async def clear_cache(
    extractor: Annotated[ContentExtractor, Depends(get_extractor)],
) -> dict:
    """Drop every cached URL result."""
    extractor.cache.clear()
    return {"success": True}
