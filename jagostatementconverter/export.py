"""CSV and DataFrame hand-off of parsed transactions."""

import csv
import io
from typing import Iterable, List

import pandas as pd

from .txn_parser import CSV_COLUMNS, Transaction


def _csv_value(value):
  if value is None:
    return ''
  if isinstance(value, bool):
    return 'true' if value else 'false'
  if isinstance(value, float) and value.is_integer():
    return str(int(value))
  return value


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
  """Render transactions as CSV text with the fixed column order.

  Fields holding a comma, quote or newline are quoted with inner quotes
  doubled; rows are separated by ``\\n`` without a trailing newline.
  """
  buf = io.StringIO()
  writer = csv.writer(buf, lineterminator='\n')
  writer.writerow(CSV_COLUMNS)
  for tx in transactions:
    row = tx.to_dict()
    writer.writerow([_csv_value(row[col]) for col in CSV_COLUMNS])
  return buf.getvalue().rstrip('\n')


def write_csv(transactions: Iterable[Transaction], csv_path: str):
  with open(csv_path, 'w', newline='', encoding='utf-8') as csvfile:
    csvfile.write(transactions_to_csv(transactions))
    csvfile.write('\n')


def transactions_to_dataframe(transactions: Iterable[Transaction]) -> pd.DataFrame:
  rows: List[dict] = [tx.to_dict() for tx in transactions]
  df = pd.DataFrame(rows, columns=CSV_COLUMNS)
  df['amount'] = pd.to_numeric(df['amount'])
  df['balance'] = pd.to_numeric(df['balance'])
  return df
