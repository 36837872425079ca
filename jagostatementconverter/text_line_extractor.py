# -*- coding: utf-8 -*-
"""text_line_extractor.py
Rebuild visual text rows from the positioned runs of a PDF text layer.

Every page is reduced to a list of ``GlyphRun`` records (x, y, text) with a
bottom-left origin, regardless of which PDF library produced them:
1.  Runs are bucketed by their rounded *y* so glyphs sitting on the same
    baseline (give or take sub-point jitter) share a row.
2.  Each bucket is sorted by *x* and joined with single spaces.
3.  Buckets are emitted top to bottom (descending *y*) and page furniture
    (banners, footers, column headers) is filtered out.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .config import ParserConfig

logger = logging.getLogger(__name__)

PdfSource = Union[str, bytes]


@dataclass(frozen=True)
class GlyphRun:
  """A positioned piece of text as reported by the PDF library."""

  x: float
  y: float
  text: str


@dataclass(frozen=True)
class RawLine:
  page: int
  text: str


# ---------------------------------------------------------------------------
# Row reconstruction
# ---------------------------------------------------------------------------

def should_skip_line(text: str, config: Optional[ParserConfig] = None) -> bool:
  """True for empty rows and known header/footer/legal boilerplate."""
  config = config or ParserConfig()
  low = text.lower().strip()
  if not low:
    return True
  if any(k in low for k in config.skip_contains):
    return True
  if any(low.startswith(p) for p in config.skip_prefixes):
    return True
  return any(all(k in low for k in group) for group in config.skip_all_of)


def rows_from_runs(runs: Iterable[GlyphRun], y_precision: int = 0) -> List[str]:
  """Cluster runs into rows, reading order top to bottom, left to right."""
  buckets: Dict[float, List[GlyphRun]] = {}
  for run in runs:
    if not run.text or not run.text.strip():
      continue
    key = round(run.y, y_precision)
    buckets.setdefault(key, []).append(run)

  rows: List[str] = []
  for key in sorted(buckets, reverse=True):
    items = sorted(buckets[key], key=lambda r: r.x)
    row_txt = ' '.join(r.text for r in items).replace('\u00a0', ' ').strip()
    rows.append(row_txt)
  return rows


def lines_from_runs(page_no: int, runs: Iterable[GlyphRun],
                    config: Optional[ParserConfig] = None) -> List[RawLine]:
  config = config or ParserConfig()
  lines = []
  for row in rows_from_runs(runs, config.y_precision):
    if should_skip_line(row, config):
      if row:
        logger.debug(f"Page {page_no}: dropping boilerplate row {row!r}")
      continue
    lines.append(RawLine(page=page_no, text=row))
  return lines



# ---------------------------------------------------------------------------
# PDF backends
# ---------------------------------------------------------------------------
# Each backend yields ``(page_count, runs)`` per page, opening the document once.

def _pymupdf_pages(source: PdfSource) -> Iterator[Tuple[int, List[GlyphRun]]]:
  import fitz  # PyMuPDF

  if isinstance(source, (bytes, bytearray)):
    doc = fitz.open(stream=bytes(source), filetype='pdf')
  else:
    doc = fitz.open(source)
  with doc:
    total = doc.page_count
    for page in doc:
      height = page.rect.height
      runs = []
      for block in page.get_text('dict')['blocks']:
        for line in block.get('lines', []):
          for span in line['spans']:
            x, y = span['origin']
            # PyMuPDF measures y downwards from the top edge
            runs.append(GlyphRun(x=x, y=height - y, text=span['text']))
      yield total, runs


def _pdfplumber_pages(source: PdfSource) -> Iterator[Tuple[int, List[GlyphRun]]]:
  import pdfplumber

  if isinstance(source, (bytes, bytearray)):
    source = io.BytesIO(bytes(source))
  with pdfplumber.open(source) as pdf:
    total = len(pdf.pages)
    for page in pdf.pages:
      height = float(page.height)
      yield total, [
        GlyphRun(x=float(w['x0']), y=height - float(w['bottom']), text=w['text'])
        for w in page.extract_words()
      ]


_BACKENDS = {
  'pymupdf': _pymupdf_pages,
  'pdfplumber': _pdfplumber_pages,
}


def iter_page_runs(source: PdfSource, backend: str = 'pymupdf') -> Iterator[Tuple[int, List[GlyphRun]]]:
  """Yield ``(page_count, runs)`` for each page in document order."""
  try:
    reader = _BACKENDS[backend]
  except KeyError:
    raise ValueError(f"Unknown backend {backend!r}") from None
  return reader(source)


def extract_lines(source: PdfSource, config: Optional[ParserConfig] = None,
                  progress_callback: Optional[Callable[[dict], None]] = None) -> List[RawLine]:
  """Extract the filtered line stream of a whole document.

  ``progress_callback`` receives ``{'phase': 'extracting', 'current', 'total'}``
  after each page.
  """
  config = config or ParserConfig()
  lines: List[RawLine] = []
  page_no = 0
  for page_no, (total, runs) in enumerate(iter_page_runs(source, config.backend), start=1):
    page_lines = lines_from_runs(page_no, runs, config)
    logger.debug(f"Page {page_no}/{total}: {len(runs)} runs -> {len(page_lines)} lines")
    lines.extend(page_lines)
    if progress_callback:
      progress_callback({'phase': 'extracting', 'current': page_no, 'total': total})

  logger.info(f"Kept {len(lines)} text lines from {page_no} page(s) using {config.backend}")
  return lines
