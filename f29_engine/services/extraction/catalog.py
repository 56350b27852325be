"""Usage: static registry of F29 form codes and the labels that denote them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FieldKind = Literal["amount", "count", "rate"]


@dataclass(frozen=True)
class FieldSpec:
    field_id: str
    numeric_code: str
    label_synonyms: tuple[str, ...]
    description: str
    kind: FieldKind = "amount"
    # scanned by the binary strategy as well
    core: bool = False

    def accepts(self, value: int, amount_floor: int) -> bool:
        """Counts and rates only need to be positive; amounts must clear the floor."""

        if value <= 0:
            return False
        return self.kind != "amount" or value >= amount_floor


def _spec(
    code: str,
    labels: tuple[str, ...],
    description: str,
    *,
    kind: FieldKind = "amount",
    core: bool = False,
) -> FieldSpec:
    return FieldSpec(
        field_id=f"code{code}",
        numeric_code=code,
        label_synonyms=labels,
        description=description,
        kind=kind,
        core=core,
    )


FIELD_CATALOG: tuple[FieldSpec, ...] = (
    _spec("502", ("DÉBITOS FACTURAS EMITIDAS",), "Invoices issued, debits"),
    _spec("503", ("CANTIDAD FACTURAS EMITIDAS",), "Invoices issued, count", kind="count"),
    _spec(
        "509",
        ("CANT. DCTOS. NOTAS DE CRÉDITOS EMITIDAS",),
        "Credit notes issued, count",
        kind="count",
    ),
    _spec("510", ("DÉBITOS NOTAS DE CRÉDITOS EMITIDAS",), "Credit notes issued, debits"),
    _spec(
        "511",
        ("CRÉD. IVA POR DCTOS. ELECTRÓNICOS", "CRÉDITO IVA"),
        "VAT credit from electronic documents",
        core=True,
    ),
    _spec(
        "519",
        ("CANT. DE DCTOS. FACT. RECIB. DEL GIRO",),
        "Received invoices, count",
        kind="count",
    ),
    _spec("520", ("CRÉDITO REC. Y REINT./FACT. DEL GIRO",), "Received invoices, credit"),
    _spec(
        "527",
        ("CANT. NOTAS DE CRÉDITO RECIBIDAS",),
        "Received credit notes, count",
        kind="count",
    ),
    _spec("528", ("CRÉDITO RECUP. Y REINT NOTAS DE CRÉD",), "Received credit notes, credit"),
    _spec("537", ("TOTAL CRÉDITOS",), "Total credits"),
    _spec("538", ("TOTAL DÉBITOS",), "Total debits", core=True),
    _spec("544", ("RECUP. IMP. ESP. DIESEL",), "Diesel special tax recovery"),
    _spec("547", ("TOTAL DETERMINADO",), "Total determined"),
    _spec("563", ("BASE IMPONIBLE",), "Net taxable base", core=True),
    _spec("595", ("SUB TOTAL IMP. DETERMINADO ANVERSO",), "Sub-total determined"),
    _spec("062", ("PPM NETO DETERMINADO", "PPM"), "Net PPM determined", core=True),
    _spec(
        "077",
        ("REMANENTE DE CRÉDITO FISC", "REMANENTE"),
        "Carried-forward tax credit",
        core=True,
    ),
    _spec("089", ("IMP. DETERM. IVA",), "VAT determined"),
    _spec("115", ("TASA PPM 1RA. CATEGORÍA",), "First-category PPM rate", kind="rate"),
    _spec("151", ("RETENCIÓN TASA LEY 21.133",), "Law 21.133 withholding"),
    _spec(
        "758",
        ("CANT. RECIBO DE PAGO MEDIOS ELECTRÓNICOS",),
        "Electronic payment receipts, count",
        kind="count",
    ),
    _spec("759", ("DÉB. RECIBO DE PAGO MEDIOS ELECTRÓNICOS",), "Electronic payment receipts, debits"),
    _spec("779", ("MONTO DE IVA POSTERGADO",), "Deferred VAT amount"),
)

CATALOG_BY_ID: dict[str, FieldSpec] = {spec.field_id: spec for spec in FIELD_CATALOG}
CATALOG_BY_CODE: dict[str, FieldSpec] = {spec.numeric_code: spec for spec in FIELD_CATALOG}

# Non-coded header fields, produced by the basic-info extractor.
BASIC_FIELDS: tuple[str, ...] = ("rut", "period", "folio", "taxpayer_name", "total_payable")


def get_field(field_id: str) -> FieldSpec:
    try:
        return CATALOG_BY_ID[field_id]
    except KeyError as exc:
        raise KeyError(f"Unknown F29 field: {field_id}") from exc
