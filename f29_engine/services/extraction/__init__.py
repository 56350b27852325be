"""Usage: multi-strategy F29 field extraction."""

from f29_engine.services.extraction.engine import ExtractionConfig, F29ExtractionResult, F29Extractor
from f29_engine.services.extraction.errors import NoExtractionPossibleError

__all__ = ["ExtractionConfig", "F29ExtractionResult", "F29Extractor", "NoExtractionPossibleError"]
