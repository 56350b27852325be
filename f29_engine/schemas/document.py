from pydantic import BaseModel, ConfigDict, Field


class DocumentInput(BaseModel):
    """One uploaded F29 form as handed over by the upload layer."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Best-effort decoded text view")
    content: bytes = Field(default=b"", description="Raw bytes of the source file")
