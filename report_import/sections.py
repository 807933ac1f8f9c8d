"""
Line-level scanning of the daily report text.

The report is a loose document: a header block of `- key: value` metrics,
then labelled sections (assets, operations, field notes, basis). Sections are
located by the first line starting with their marker label and end at the next
known marker or the first blank line, whichever comes first.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ASSETS_MARKER = "币种表现"
OPERATIONS_MARKER = "当日操作"
FIELDS_MARKER = "字段说明"
BASIS_MARKER = "口径"
BASIS_INLINE_SEPARATOR = "口径："


@dataclass
class ReportSections:
    assets: list[str] = field(default_factory=list)
    operations: list[str] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)
    basis: list[str] = field(default_factory=list)


class BlockState(enum.Enum):
    SCANNING = "scanning"
    IN_BLOCK = "in_block"
    DONE = "done"


def normalize_lines(text: str) -> list[str]:
    return (text or "").replace("\r\n", "\n").split("\n")


def extract_metrics(lines: list[str]) -> dict[str, str]:
    """
    `- key: value` pairs from the leading block only; scanning stops at the first
    blank line, so metrics further down the report are not picked up.
    """
    metrics: dict[str, str] = {}
    for raw in lines:
        line = raw.strip()
        if line.startswith("- ") and ":" in line:
            parts = [p.strip() for p in line[2:].split(":")]
            if len(parts) >= 2:
                metrics[parts[0]] = ":".join(parts[1:])
        elif line == "":
            break
    return metrics


def find_marker(lines: list[str], label: str) -> int:
    for i, raw in enumerate(lines):
        if raw.strip().startswith(label):
            return i
    return -1


def collect_block(lines: list[str], start: int, end: int) -> list[str]:
    """
    Stripped lines strictly between `start` and `end` (`end == -1` means end of
    text). A blank line terminates the block even before `end` is reached.
    """
    if start == -1:
        return []
    stop = len(lines) if end == -1 else min(end, len(lines))
    block: list[str] = []
    state = BlockState.SCANNING
    i = start
    while state is not BlockState.DONE:
        if state is BlockState.SCANNING:
            i += 1
            state = BlockState.IN_BLOCK if i < stop else BlockState.DONE
            continue
        line = lines[i].strip()
        if not line:
            if i + 1 < stop:
                logger.debug("Block after line %d cut short by blank line %d", start, i)
            state = BlockState.DONE
            continue
        block.append(line)
        state = BlockState.SCANNING
    return block


def collect_basis(lines: list[str], index: int) -> list[str]:
    """
    The basis block may start inline on its marker line (`口径：...`) and runs to
    the end of text; blank lines are skipped rather than ending the block.
    """
    if index == -1:
        return []
    out: list[str] = []
    head = lines[index].split(BASIS_INLINE_SEPARATOR)
    if len(head) > 1:
        inline = head[1].strip()
        if inline:
            out.append(inline)
    for raw in lines[index + 1 :]:
        line = raw.strip()
        if line:
            out.append(line)
    return out


def split_sections(lines: list[str]) -> ReportSections:
    assets_i = find_marker(lines, ASSETS_MARKER)
    ops_i = find_marker(lines, OPERATIONS_MARKER)
    fields_i = find_marker(lines, FIELDS_MARKER)
    basis_i = find_marker(lines, BASIS_MARKER)
    for label, idx in (
        (ASSETS_MARKER, assets_i),
        (OPERATIONS_MARKER, ops_i),
        (FIELDS_MARKER, fields_i),
        (BASIS_MARKER, basis_i),
    ):
        if idx == -1:
            logger.debug("Section marker %s not found", label)

    return ReportSections(
        assets=collect_block(lines, assets_i, fields_i if ops_i == -1 else ops_i),
        operations=collect_block(lines, ops_i, basis_i if fields_i == -1 else fields_i),
        fields=collect_block(lines, fields_i, basis_i),
        basis=collect_basis(lines, basis_i),
    )
