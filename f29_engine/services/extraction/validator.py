"""Usage: derive computable F29 fields and flag inconsistencies between related codes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from f29_engine.services.extraction.candidates import DERIVED_SOURCE, FieldResult
from f29_engine.services.extraction.reconciler import order_fields

logger = logging.getLogger(__name__)

NET_PURCHASES = "net_purchases"
GROSS_MARGIN = "gross_margin"
# VAT balance in the taxpayer's favour (538 - 511) beyond this is flagged
HIGH_VAT_CREDIT_LIMIT = 10_000_000


@dataclass(frozen=True)
class ValidationWarning:
    rule: str
    fields: tuple[str, ...]
    expected: int
    observed: int

    @property
    def difference(self) -> int:
        return abs(self.observed - self.expected)


@dataclass(frozen=True)
class AmountRange:
    minimum: int
    maximum: int
    typical_minimum: int
    typical_maximum: int


# Plausible and typical monthly amounts (CLP) for a small or medium taxpayer.
AMOUNT_RANGES: dict[str, AmountRange] = {
    "code538": AmountRange(1_000, 50_000_000, 100_000, 10_000_000),
    "code511": AmountRange(0, 100_000_000, 50_000, 20_000_000),
    "code563": AmountRange(10_000, 500_000_000, 1_000_000, 100_000_000),
    "code062": AmountRange(0, 5_000_000, 10_000, 1_000_000),
}


@dataclass(frozen=True)
class ValidationOutcome:
    fields: dict[str, FieldResult]
    warnings: list[ValidationWarning]


def validate_fields(
    fields: dict[str, FieldResult],
    *,
    tolerance: int = 1000,
    vat_rate: float = 0.19,
    debit_rate_tolerance: float = 0.15,
) -> ValidationOutcome:
    """Add derived fields and collect warnings; extracted values are never touched."""

    validated = dict(fields)
    _derive_vat_determined(validated)
    _derive_net_purchases(validated, vat_rate)
    _derive_gross_margin(validated)

    warnings: list[ValidationWarning] = []
    for warning in (
        _check_vat_determined(validated, tolerance),
        _check_total_determined(validated, tolerance),
        _check_debit_vs_base(validated, vat_rate, debit_rate_tolerance),
        *(_check_range(validated, field_id, bounds) for field_id, bounds in AMOUNT_RANGES.items()),
        _check_vat_credit(validated),
    ):
        if warning is not None:
            logger.warning(
                "F29 inconsistency rule=%s fields=%s expected=%d observed=%d",
                warning.rule,
                warning.fields,
                warning.expected,
                warning.observed,
            )
            warnings.append(warning)

    return ValidationOutcome(fields=order_fields(validated), warnings=warnings)


def _amount(fields: dict[str, FieldResult], field_id: str) -> int | None:
    result = fields.get(field_id)
    if result is None or not isinstance(result.value, int):
        return None
    return result.value


def _is_extracted(fields: dict[str, FieldResult], field_id: str) -> bool:
    result = fields.get(field_id)
    return result is not None and result.strategy != DERIVED_SOURCE


def _derive_vat_determined(fields: dict[str, FieldResult]) -> None:
    if "code089" in fields:
        return
    debits = _amount(fields, "code538")
    credits = _amount(fields, "code537")
    if debits is None or credits is None:
        return
    value = max(0, debits - credits)
    fields["code089"] = FieldResult(value=value, strategy=DERIVED_SOURCE)
    logger.info("Derived code089=%d from code538 - code537", value)


def _derive_net_purchases(fields: dict[str, FieldResult], vat_rate: float) -> None:
    if NET_PURCHASES in fields or vat_rate <= 0:
        return
    credit = _amount(fields, "code511")
    if credit is None:
        return
    fields[NET_PURCHASES] = FieldResult(value=round(credit / vat_rate), strategy=DERIVED_SOURCE)


def _check_vat_determined(fields: dict[str, FieldResult], tolerance: int) -> ValidationWarning | None:
    if not _is_extracted(fields, "code089"):
        return None
    observed = _amount(fields, "code089")
    debits = _amount(fields, "code538")
    credits = _amount(fields, "code537")
    if credits is None:
        credits = _amount(fields, "code511")
    if observed is None or debits is None or credits is None:
        return None
    expected = max(0, debits - credits)
    if abs(observed - expected) <= tolerance:
        return None
    return ValidationWarning(
        rule="vat_determined",
        fields=("code089", "code538"),
        expected=expected,
        observed=observed,
    )


def _check_total_determined(fields: dict[str, FieldResult], tolerance: int) -> ValidationWarning | None:
    observed = _amount(fields, "code547")
    vat = _amount(fields, "code089")
    ppm = _amount(fields, "code062")
    if observed is None or vat is None or ppm is None:
        return None
    expected = vat + ppm
    if abs(observed - expected) <= tolerance:
        return None
    return ValidationWarning(
        rule="total_determined",
        fields=("code547", "code089"),
        expected=expected,
        observed=observed,
    )


def _check_debit_vs_base(
    fields: dict[str, FieldResult],
    vat_rate: float,
    rate_tolerance: float,
) -> ValidationWarning | None:
    debits = _amount(fields, "code538")
    base = _amount(fields, "code563")
    if debits is None or base is None:
        return None
    expected = round(base * vat_rate)
    if expected <= 0 or abs(debits - expected) / expected <= rate_tolerance:
        return None
    return ValidationWarning(
        rule="debit_vs_base",
        fields=("code538", "code563"),
        expected=expected,
        observed=debits,
    )


def _derive_gross_margin(fields: dict[str, FieldResult]) -> None:
    if GROSS_MARGIN in fields:
        return
    sales = _amount(fields, "code563")
    purchases = _amount(fields, NET_PURCHASES)
    if sales is None or purchases is None:
        return
    fields[GROSS_MARGIN] = FieldResult(value=max(0, sales - purchases), strategy=DERIVED_SOURCE)


def _check_range(
    fields: dict[str, FieldResult],
    field_id: str,
    bounds: AmountRange,
) -> ValidationWarning | None:
    value = _amount(fields, field_id)
    if not value:
        return None
    if value < bounds.minimum or value > bounds.maximum:
        rule = "out_of_range"
        expected = bounds.minimum if value < bounds.minimum else bounds.maximum
    elif value < bounds.typical_minimum or value > bounds.typical_maximum:
        rule = "atypical_range"
        expected = bounds.typical_minimum if value < bounds.typical_minimum else bounds.typical_maximum
    else:
        return None
    return ValidationWarning(rule=rule, fields=(field_id,), expected=expected, observed=value)


def _check_vat_credit(fields: dict[str, FieldResult]) -> ValidationWarning | None:
    debits = _amount(fields, "code538")
    credit = _amount(fields, "code511")
    if debits is None or credit is None:
        return None
    balance = debits - credit
    if balance >= -HIGH_VAT_CREDIT_LIMIT:
        return None
    return ValidationWarning(
        rule="high_vat_credit",
        fields=("code538", "code511"),
        expected=-HIGH_VAT_CREDIT_LIMIT,
        observed=balance,
    )
