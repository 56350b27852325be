from __future__ import annotations

from pydantic import BaseModel, Field

from f29_engine.services.extraction.engine import F29ExtractionResult
from f29_engine.services.extraction.validator import ValidationWarning


class ValidationWarningModel(BaseModel):
    """Inconsistency between two related F29 codes."""

    rule: str = Field(..., description="Consistency rule that was violated")
    fields: list[str] = Field(..., description="Field ids compared by the rule")
    expected: int = Field(..., description="Value implied by the related fields")
    observed: int = Field(..., description="Value found in the declaration")
    difference: int = Field(..., description="Absolute gap between observed and expected")

    @classmethod
    def from_warning(cls, warning: ValidationWarning) -> "ValidationWarningModel":
        return cls(
            rule=warning.rule,
            fields=list(warning.fields),
            expected=warning.expected,
            observed=warning.observed,
            difference=warning.difference,
        )


class F29ExtractionResponse(BaseModel):
    success: bool = Field(..., description="True when at least one field was recovered")
    data: dict[str, int | str] = Field(
        default_factory=dict,
        description="Recovered values keyed by field id (rut, period, code538, ...)",
    )
    sources: dict[str, str] = Field(
        default_factory=dict,
        description="Winning strategy per field, or 'derived'",
    )
    warnings: list[ValidationWarningModel] = Field(default_factory=list)
    message: str = "ok"

    @classmethod
    def from_result(cls, result: F29ExtractionResult, *, message: str = "ok") -> "F29ExtractionResponse":
        return cls(
            success=True,
            data=result.values(),
            sources=result.sources(),
            warnings=[ValidationWarningModel.from_warning(w) for w in result.warnings],
            message=message,
        )
