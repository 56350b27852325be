from typing import Protocol, runtime_checkable


@runtime_checkable
class BaseTextExtractor(Protocol):
    async def extract_text(
        self,
        source: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str:
        """Return the best-effort text view of the uploaded source."""
        ...
