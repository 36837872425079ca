"""Indonesian short dates ("17 Jun 2021") and clock times ("18.01")."""

import re
from typing import NamedTuple, Optional

MONTHS_ID = {
  'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'mei': 5, 'may': 5,
  'jun': 6, 'jul': 7, 'agt': 8, 'agu': 8, 'aug': 8,
  'sep': 9, 'okt': 10, 'oct': 10, 'nov': 11, 'des': 12, 'dec': 12,
}

DATE_PREFIX_RE = re.compile(r"^(\d{1,2})\s+([A-Za-z]{3})\s+(\d{4})\b")
# Report banner such as "17 Jun 2021 - 12 Des 2025"
DATE_RANGE_RE = re.compile(
  r"^\d{1,2}\s+[A-Za-z]{3}\s+\d{4}\s*-\s*\d{1,2}\s+[A-Za-z]{3}\s+\d{4}\b",
  re.IGNORECASE,
)
# The PDF renders the separator as either "." or ":"
TIME_PREFIX_RE = re.compile(r"^(\d{1,2})[.:](\d{2})\b")


class DatePrefix(NamedTuple):
  matched: str
  year: int
  month: int
  day: int

  @property
  def iso(self) -> str:
    return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


class TimePrefix(NamedTuple):
  matched: str
  hour: int
  minute: int

  @property
  def hhmm(self) -> str:
    return f"{self.hour:02d}:{self.minute:02d}"


def parse_date_prefix(text: str) -> Optional[DatePrefix]:
  """Match a leading ``D Mon YYYY`` token; ``None`` for unknown month names."""
  m = DATE_PREFIX_RE.match(text)
  if not m:
    return None
  month = MONTHS_ID.get(m.group(2).lower())
  if month is None:
    return None
  return DatePrefix(m.group(0), int(m.group(3)), month, int(m.group(1)))


def parse_time_prefix(text: str) -> Optional[TimePrefix]:
  m = TIME_PREFIX_RE.match(text)
  if not m:
    return None
  return TimePrefix(m.group(0), int(m.group(1)), int(m.group(2)))


def is_date_range(text: str) -> bool:
  return DATE_RANGE_RE.match(text) is not None
