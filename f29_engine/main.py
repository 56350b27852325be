import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from f29_engine.api.routes.f29 import router as f29_router
from f29_engine.api.routes.health import router as health_router
from f29_engine.core.logging import setup_logging
from f29_engine.services.text.pdfplumber_text import PdfPlumberTextExtractor
from f29_engine.state import global_state

# before the app is created
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting F29 extraction service...")

    global_state.text_extractor = PdfPlumberTextExtractor()

    logger.info("System ready!")
    yield
    logger.info("Shutting down service...")


app = FastAPI(title="F29 Extraction Service", lifespan=lifespan)

app.include_router(health_router, prefix="/api")
app.include_router(f29_router, prefix="/api")
