"""Indonesian-locale number handling.

Statement figures use ``.`` for thousands and ``,`` for decimals, e.g.
``28.369,10``.  The PDF text layer sometimes splits a group from its
separator (``5.704 .768`` or ``5.704. 768``), which has to be repaired
before tokenising a line.
"""

import re
from typing import Optional

# A digit, a dot, stray spaces, then a digit
_SPLIT_GROUP_RE = re.compile(r"(?<=\d)\.\s+(?=\d)")
# A digit group, spaces, then a dot-led group ("5.704 .768")
_SPLIT_DOT_RE = re.compile(r"(?<=\d)\s+\.(?=\d)")

# Token shape of an amount/balance cell
NUMERIC_TOKEN_RE = re.compile(r"^[+\-]?[0-9][0-9.]*(?:,[0-9]+)?$")

_CLEAN_RE = re.compile(r"[^0-9.,]")


def normalize_number_separators(text: str) -> str:
  """Glue thousands groups that the text layer pulled apart."""
  text = _SPLIT_GROUP_RE.sub('.', text)
  return _SPLIT_DOT_RE.sub('.', text)


def parse_idr_number(value) -> Optional[float]:
  """Parse an Indonesian formatted number, ``None`` when nothing numeric is left.

  >>> parse_idr_number('5.704.768')
  5704768.0
  >>> parse_idr_number('28.369,10')
  28369.1
  >>> parse_idr_number('-14.548')
  -14548.0
  """
  if value is None:
    return None
  raw = str(value).strip()
  if not raw:
    return None

  sign = -1 if raw.startswith('-') else 1
  cleaned = _CLEAN_RE.sub('', raw)
  if not cleaned:
    return None

  if ',' in cleaned:
    int_part, _, dec_part = cleaned.rpartition(',')
    int_part = int_part.replace('.', '').replace(',', '')
    num_str = f"{int_part or '0'}.{dec_part or '0'}"
  else:
    num_str = cleaned.replace('.', '')

  try:
    return sign * float(num_str)
  except ValueError:
    return None
