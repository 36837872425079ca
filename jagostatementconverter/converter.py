"""Converts Jago transaction-history PDFs into transaction records.

extract lines -> stitch chunks -> parse each chunk -> collect, failing
with a descriptive error when a stage comes back empty.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from .config import ParserConfig
from .exceptions import NoTextExtractedError, NoTransactionsFoundError, NoValidTransactionsError
from .export import write_csv
from .text_line_extractor import PdfSource, RawLine, extract_lines
from .txn_parser import Transaction, parse_transaction
from .txn_stream import TransactionChunk, stitch_rows

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[dict], None]


def is_jago_pdf(filename: str) -> bool:
  """Filename heuristic for Jago history exports."""
  name = os.path.basename(filename).lower()
  return name.endswith('.pdf') and any(k in name for k in ('jago', 'history', 'transaksi'))


class JagoStatementConverter:
  """Drives extraction, stitching and parsing for one file at a time.

  Not reentrant: ``dropped_chunks`` holds the rows skipped by the most recent
  ``convert``/``convert_lines``/``convert_multiple`` call and is replaced by
  the next one.  Use one converter per thread.
  """

  def __init__(self, config: Optional[ParserConfig] = None):
    self.config = config or ParserConfig()
    self.dropped_chunks: List[TransactionChunk] = []

  def convert(self, source: PdfSource, source_file: Optional[str] = None,
              progress_callback: Optional[ProgressCallback] = None) -> List[Transaction]:
    """Parse one PDF given as a path or as raw bytes."""
    if source_file is None and isinstance(source, str):
      source_file = os.path.basename(source)

    self._notify(progress_callback, phase='starting', message='Starting PDF extraction...')
    logger.info(f"Converting {source_file or '<bytes>'}")
    lines = extract_lines(source, self.config, progress_callback)
    return self.convert_lines(lines, source_file, progress_callback)

  def convert_lines(self, lines: Sequence[RawLine], source_file: Optional[str] = None,
                    progress_callback: Optional[ProgressCallback] = None) -> List[Transaction]:
    """Run stitching and parsing over an already extracted line stream."""
    if not lines:
      raise NoTextExtractedError(source_file)

    self._notify(progress_callback, phase='stitching', message='Stitching transaction rows...')
    chunks = stitch_rows(lines)
    logger.info(f"Stitched {len(lines)} lines into {len(chunks)} chunk(s)")
    if not chunks:
      raise NoTransactionsFoundError(source_file)

    self._notify(progress_callback, phase='parsing', message='Parsing transactions...', total=len(chunks))
    results = self._parse_chunks(chunks, source_file, progress_callback)

    transactions: List[Transaction] = []
    self.dropped_chunks = []
    for chunk, tx in zip(chunks, results):
      if tx is None:
        logger.warning(f"Skipping row on page {chunk.page} without a readable date: {chunk.first_line!r}")
        self.dropped_chunks.append(chunk)
      else:
        transactions.append(tx)

    if not transactions:
      raise NoValidTransactionsError(len(chunks), source_file)

    message = f"Parsed {len(transactions)} transaction(s)"
    if self.dropped_chunks:
      message += f", skipped {len(self.dropped_chunks)} unreadable row(s)"
    logger.info(message)
    self._notify(progress_callback, phase='complete', message=message)
    return transactions

  def convert_multiple(self, sources: Sequence[str],
                       progress_callback: Optional[ProgressCallback] = None) -> List[Transaction]:
    """Convert several files, concatenating results in argument order."""
    all_results: List[Transaction] = []
    dropped: List[TransactionChunk] = []
    for path in sources:
      all_results.extend(self.convert(path, progress_callback=progress_callback))
      dropped.extend(self.dropped_chunks)
    self.dropped_chunks = dropped
    return all_results

  def convert_to_csv(self, sources: Sequence[str], csv_path: str,
                     progress_callback: Optional[ProgressCallback] = None) -> int:
    """Convert files and write the combined CSV; returns the row count."""
    transactions = self.convert_multiple(sources, progress_callback)
    write_csv(transactions, csv_path)
    logger.info(f"Wrote {len(transactions)} row(s) to {csv_path}")
    return len(transactions)

  def _parse_chunks(self, chunks: List[TransactionChunk], source_file: Optional[str],
                    progress_callback: Optional[ProgressCallback]) -> List[Optional[Transaction]]:
    phrases = self.config.sorted_phrases()
    total = len(chunks)

    def parse(chunk):
      return parse_transaction(chunk, source_file, self.config, phrases)

    if self.config.max_workers > 1:
      # map() hands results back in submission order
      with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
        parsed = pool.map(parse, chunks)
        results = []
        for i, tx in enumerate(parsed):
          results.append(tx)
          self._report_parsing(progress_callback, i, total)
      return results

    results = []
    for i, chunk in enumerate(chunks):
      results.append(parse(chunk))
      self._report_parsing(progress_callback, i, total)
    return results

  def _report_parsing(self, progress_callback, index, total):
    if index % self.config.progress_every == 0:
      self._notify(progress_callback, phase='parsing', current=index, total=total)

  @staticmethod
  def _notify(progress_callback, **event):
    if progress_callback:
      progress_callback(event)
