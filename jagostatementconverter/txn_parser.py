# -*- coding: utf-8 -*-
"""txn_parser.py
Turn one stitched chunk into a ``Transaction`` record.

Only the date is mandatory: a chunk whose first line carries no readable date
is rejected (``None``).  Every other field degrades to ``None`` or ``""``
when the text does not cooperate, so a malformed row still yields a record.
"""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .config import ParserConfig
from .dates import parse_date_prefix, parse_time_prefix
from .idr_number import NUMERIC_TOKEN_RE, normalize_number_separators, parse_idr_number
from .txn_stream import TransactionChunk

logger = logging.getLogger(__name__)

__all__ = [
  "CSV_COLUMNS",
  "Transaction",
  "extract_amount_and_balance",
  "find_detail_phrase",
  "extract_transaction_ids",
  "parse_transaction",
]

CSV_COLUMNS = [
  "source_file", "page", "date", "time", "datetime",
  "source_or_destination", "transaction_detail", "note",
  "amount", "balance", "currency", "transaction_id",
  "transaction_ids", "is_reversal", "raw_text",
]

ID_RE = re.compile(r"\bID#\s*([A-Za-z0-9_\-/]+)")
REVERSAL_RE = re.compile(r"\b(reversal|pembatalan)\b", re.IGNORECASE)


@dataclass(frozen=True)
class Transaction:
  """One ledger entry, field names match the CSV hand-off columns."""

  source_file: Optional[str]
  page: int
  date: str
  time: Optional[str]
  datetime: Optional[str]
  source_or_destination: str
  transaction_detail: str
  note: str
  amount: Optional[float]
  balance: Optional[float]
  currency: str
  transaction_id: Optional[str]
  transaction_ids: Optional[str]
  is_reversal: bool
  raw_text: str

  def to_dict(self) -> Dict[str, object]:
    return asdict(self)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def extract_amount_and_balance(line: str) -> Tuple[Optional[float], Optional[float], str]:
  """Take the last two numeric tokens of ``line`` as (amount, balance).

  Returns the remaining tokens re-joined as the third element.  With fewer
  than two numeric tokens both figures are ``None`` and the normalised line
  comes back unchanged.
  """
  norm = normalize_number_separators(line.replace("\u00a0", " ").strip())
  tokens = norm.split()
  positions = [i for i, tok in enumerate(tokens) if NUMERIC_TOKEN_RE.match(tok)]
  if len(positions) < 2:
    return None, None, norm

  pos_amount, pos_balance = positions[-2], positions[-1]
  amount = parse_idr_number(tokens[pos_amount])
  balance = parse_idr_number(tokens[pos_balance])
  kept = [tok for i, tok in enumerate(tokens) if i not in (pos_amount, pos_balance)]
  return amount, balance, " ".join(kept).strip()


def find_detail_phrase(body: str, phrases: Sequence[str]) -> Optional[Tuple[str, int]]:
  """Earliest known phrase in ``body`` as (phrase, index).

  ``phrases`` must be ordered longest first: on equal start positions the
  first (longest) candidate is kept.
  """
  low = body.lower()
  best: Optional[Tuple[str, int]] = None
  for phrase in phrases:
    idx = low.find(phrase.lower())
    if idx == -1:
      continue
    if best is None or idx < best[1]:
      best = (phrase, idx)
  return best


def extract_transaction_ids(raw_text: str) -> List[str]:
  """Distinct ``ID#`` values in first-seen order."""
  seen: List[str] = []
  for m in ID_RE.finditer(raw_text):
    if m.group(1) not in seen:
      seen.append(m.group(1))
  return seen


def _strip_leading_time(text: str) -> str:
  text = text.strip()
  t = parse_time_prefix(text)
  return text[len(t.matched):].strip() if t else text


def _count_numeric(line: str) -> int:
  return sum(1 for tok in normalize_number_separators(line).split() if NUMERIC_TOKEN_RE.match(tok))


def _wrapped_record_line(lines: Sequence[str]) -> str:
  """Join continuation lines up to the one carrying the amount/balance pair.

  Lines after the figures (ids, free-text remarks) are left out so their
  digits cannot be taken for amount or balance.
  """
  parts = []
  for line in lines:
    parts.append(line.strip())
    if _count_numeric(line) >= 2:
      break
  return _strip_leading_time(" ".join(parts))


def _find_time(chunk: TransactionChunk, rest_of_first: str, lookahead: int):
  for line in chunk.lines[1:1 + lookahead]:
    t = parse_time_prefix(line.strip())
    if t:
      return t
  return parse_time_prefix(rest_of_first)


# ---------------------------------------------------------------------------
# Chunk parser
# ---------------------------------------------------------------------------

def parse_transaction(chunk: TransactionChunk, source_file: Optional[str] = None,
                      config: Optional[ParserConfig] = None,
                      phrases: Optional[Sequence[str]] = None) -> Optional[Transaction]:
  """Parse one chunk, ``None`` when its first line has no valid date prefix."""
  config = config or ParserConfig()
  phrases = phrases if phrases is not None else config.sorted_phrases()

  first_line = chunk.first_line.replace("\u00a0", " ").strip()
  date_info = parse_date_prefix(first_line)
  if date_info is None:
    return None

  rest = first_line[len(date_info.matched):].strip()
  time_info = _find_time(chunk, rest, config.time_lookahead)
  time_str = time_info.hhmm if time_info else None
  datetime_str = f"{date_info.iso} {time_str}" if time_str else None

  # A bare date line means the record body was wrapped onto the next lines
  record_line = _strip_leading_time(rest)
  if not record_line and len(chunk.lines) > 1:
    record_line = _wrapped_record_line(chunk.lines[1:])

  amount, balance, stripped = extract_amount_and_balance(record_line)
  body = _strip_leading_time(stripped)

  raw_text = chunk.raw_text
  ids = extract_transaction_ids(raw_text)

  source_or_dest, detail, note = "", "", body
  match = find_detail_phrase(body, phrases)
  if match is not None:
    detail, idx = match
    source_or_dest = body[:idx].strip()
    note = body[idx + len(detail):].strip()

  tx = Transaction(
    source_file=source_file,
    page=chunk.page,
    date=date_info.iso,
    time=time_str,
    datetime=datetime_str,
    source_or_destination=source_or_dest,
    transaction_detail=detail,
    note=note,
    amount=amount,
    balance=balance,
    currency=config.currency,
    transaction_id=ids[0] if ids else None,
    transaction_ids=";".join(ids) if ids else None,
    is_reversal=REVERSAL_RE.search(raw_text) is not None,
    raw_text=raw_text,
  )
  logger.debug(f"Parsed {tx.date} {tx.transaction_detail or '-'} amount={tx.amount} balance={tx.balance}")
  return tx
