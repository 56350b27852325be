import logging
from typing import Final

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from f29_engine.api.deps import TextExtractorDep
from f29_engine.schemas.f29 import F29ExtractionResponse
from f29_engine.services.extraction import NoExtractionPossibleError
from f29_engine.services.pipelines.f29 import F29ExtractionPipeline

router = APIRouter(prefix="/f29", tags=["f29"])

logger = logging.getLogger(__name__)
ALLOWED_CONTENT_TYPES: Final[set[str]] = {
    "application/pdf",
    "text/plain",
    "application/octet-stream",
}


@router.post(
    "/extract",
    summary="Extract F29 declaration fields",
    response_model=F29ExtractionResponse,
)
async def extract_f29(
    text_extractor: TextExtractorDep,
    file: UploadFile = File(..., description="F29 declaration as PDF or plain text"),
    text: str | None = Form(default=None, description="Pre-extracted text view of the file"),
) -> F29ExtractionResponse:
    """Run the multi-strategy F29 extraction engine on an uploaded file."""

    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported file type: {file.content_type}",
        )

    try:
        payload = await file.read()
    except Exception as exc:  # pragma: no cover - upload IO errors are rare
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to read uploaded file.",
        ) from exc

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty.",
        )

    pipeline = F29ExtractionPipeline(text_extractor=text_extractor)
    try:
        result = await pipeline.run(
            payload,
            filename=file.filename,
            content_type=content_type,
            text=text,
        )
    except NoExtractionPossibleError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(exc), "errors": [exc.code]},
        ) from exc
    except Exception as exc:  # pragma: no cover - passthrough for service failures
        logger.exception("F29 extraction failed")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="F29 extraction failed.",
        ) from exc

    return F29ExtractionResponse.from_result(result)
