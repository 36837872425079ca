"""
Jago Statement Converter Package

Rebuilds structured transactions from Bank Jago transaction-history PDFs.
"""

from .config import ParserConfig
from .converter import JagoStatementConverter, is_jago_pdf
from .exceptions import (
  NoTextExtractedError,
  NoTransactionsFoundError,
  NoValidTransactionsError,
  StatementParseError,
)
from .export import transactions_to_csv, transactions_to_dataframe, write_csv
from .idr_number import parse_idr_number
from .txn_parser import Transaction, parse_transaction

__version__ = "1.0.0"

__all__ = [
  "JagoStatementConverter",
  "ParserConfig",
  "Transaction",
  "StatementParseError",
  "NoTextExtractedError",
  "NoTransactionsFoundError",
  "NoValidTransactionsError",
  "is_jago_pdf",
  "parse_idr_number",
  "parse_transaction",
  "transactions_to_csv",
  "transactions_to_dataframe",
  "write_csv",
]
