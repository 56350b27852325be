"""Usage: shared text normalization, line/block splitting and table detection helpers."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
_COLUMN_SPLIT_RE = re.compile(r"\s{2,}|\t")
TABLE_HEADER_MARKERS: tuple[str, ...] = ("codigo", "glosa", "valor")


@dataclass(frozen=True)
class NormalizeConfig:
    fold_accents: bool = False
    lowercase: bool = False
    collapse_whitespace: bool = False


# Case- and accent-insensitive matching of form labels.
MATCH_NORMALIZE = NormalizeConfig(fold_accents=True, lowercase=True)


def normalize_text(text: str, config: NormalizeConfig = MATCH_NORMALIZE) -> str:
    value = text
    if config.fold_accents:
        value = _fold_accents(value)
    if config.collapse_whitespace:
        value = " ".join(value.split())
    if config.lowercase:
        value = value.lower()
    return value


def split_lines(text: str) -> list[str]:
    if not text:
        return []
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def split_blocks(text: str) -> list[str]:
    """Split text into blocks separated by blank lines."""

    if not text:
        return []
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return [block for block in _BLOCK_SPLIT_RE.split(normalized) if block.strip()]


def split_columns(line: str) -> list[str]:
    """Split a rendered table row on runs of two or more spaces or tabs."""

    return [part.strip() for part in _COLUMN_SPLIT_RE.split(line.strip()) if part.strip()]


def is_visual_table_block(block: str) -> bool:
    value = normalize_text(block)
    return all(marker in value for marker in TABLE_HEADER_MARKERS)


def visual_table_blocks(text: str) -> list[str]:
    return [block for block in split_blocks(text) if is_visual_table_block(block)]


def is_table_row(line: str) -> bool:
    return len(split_columns(line)) >= 3


def strip_visual_tables(text: str) -> str:
    """Drop the column-aligned rows of "Código / Glosa / Valor" blocks.

    Everything else, including single-spaced lines inside those blocks, is kept.
    """

    blocks = split_blocks(text)
    if not any(is_visual_table_block(block) for block in blocks):
        return text
    kept: list[str] = []
    for block in blocks:
        if not is_visual_table_block(block):
            kept.append(block)
            continue
        lines = [line for line in split_lines(block) if not is_table_row(line)]
        if any(line.strip() for line in lines):
            kept.append("\n".join(lines))
    return "\n\n".join(kept)


def code_pattern(code: str) -> str:
    """Regex for a form code standing alone, not as part of a longer number."""

    return rf"(?<![\d.,]){re.escape(code)}(?![.,]?\d)"


def _fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))
