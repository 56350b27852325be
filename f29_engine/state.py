from f29_engine.services.text.base import BaseTextExtractor


class AppState:
    text_extractor: BaseTextExtractor | None = None


global_state = AppState()
