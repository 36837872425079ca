# -*- coding: utf-8 -*-
"""txn_stream.py
Group the flat line stream into per-transaction chunks.

The statement has no record delimiters; a transaction is recognised by the
date that opens its first line.  A tiny state machine walks the lines once:

* date line        -> close the open chunk (if any) and open a new one,
                      unless the line is the report's date-range banner;
* period header    -> ("Juli 2021") close the open chunk, open nothing;
* anything else    -> continuation text of the open chunk, or dropped when
                      no chunk is open.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from .dates import is_date_range, parse_date_prefix
from .text_line_extractor import RawLine

logger = logging.getLogger(__name__)

__all__ = [
  "LineKind",
  "TransactionChunk",
  "StreamStitcher",
  "classify_line",
  "stitch_rows",
]

PERIOD_HEADER_RE = re.compile(r"^[A-Za-z]+(?:\s+\d{4})?$")


class LineKind(Enum):
  DATE_RANGE = "date_range"
  DATE_START = "date_start"
  PERIOD_HEADER = "period_header"
  CONTINUATION = "continuation"


class StitchState(Enum):
  NO_CHUNK = "no_open_chunk"
  CHUNK_OPEN = "chunk_open"


@dataclass
class TransactionChunk:
  """Contiguous lines believed to describe one transaction."""

  page: int
  lines: List[str] = field(default_factory=list)

  @property
  def raw_text(self) -> str:
    return "\n".join(self.lines)

  @property
  def first_line(self) -> str:
    return self.lines[0] if self.lines else ""


def classify_line(text: str) -> LineKind:
  """Classify one line; the range banner check runs before the date check."""
  if parse_date_prefix(text) is not None:
    if is_date_range(text):
      return LineKind.DATE_RANGE
    return LineKind.DATE_START
  if PERIOD_HEADER_RE.match(text.strip()):
    return LineKind.PERIOD_HEADER
  return LineKind.CONTINUATION


class StreamStitcher:
  """Single-pass chunk builder fed one ``RawLine`` at a time."""

  def __init__(self):
    self.state = StitchState.NO_CHUNK
    self.current: Optional[TransactionChunk] = None
    self.chunks: List[TransactionChunk] = []
    self.stray_lines = 0

  def feed_line(self, line: RawLine):
    kind = classify_line(line.text)

    if kind is LineKind.DATE_RANGE:
      logger.debug(f"Skipping date-range banner {line.text!r}")
      return

    if kind is LineKind.DATE_START:
      self._close()
      self.current = TransactionChunk(page=line.page, lines=[line.text])
      self.state = StitchState.CHUNK_OPEN
      return

    if kind is LineKind.PERIOD_HEADER:
      self._close()
      return

    if self.state is StitchState.CHUNK_OPEN:
      self.current.lines.append(line.text)
    else:
      self.stray_lines += 1

  def finalise(self) -> List[TransactionChunk]:
    """Flush the open chunk and return every chunk in document order."""
    self._close()
    if self.stray_lines:
      logger.debug(f"Dropped {self.stray_lines} line(s) outside any transaction")
    return self.chunks

  def _close(self):
    if self.current is not None:
      self.chunks.append(self.current)
    self.current = None
    self.state = StitchState.NO_CHUNK


def stitch_rows(lines: Iterable[RawLine]) -> List[TransactionChunk]:
  stitcher = StreamStitcher()
  for line in lines:
    stitcher.feed_line(line)
  return stitcher.finalise()
