from typing import Annotated
from fastapi import Depends, HTTPException
from f29_engine.services.text.base import BaseTextExtractor
from f29_engine.state import global_state


async def get_text_extractor() -> BaseTextExtractor:
    if not global_state.text_extractor:
        raise HTTPException(status_code=503, detail="Text extraction service not initialized")
    return global_state.text_extractor


TextExtractorDep = Annotated[BaseTextExtractor, Depends(get_text_extractor)]
