"""Document-level parse failures."""


class StatementParseError(ValueError):
  """The statement as a whole could not be turned into transactions."""


class NoTextExtractedError(StatementParseError):
  def __init__(self, source=None):
    super().__init__(
      f"No text could be extracted from {source or 'the PDF'} "
      "(it may be encrypted, scanned or empty)"
    )


class NoTransactionsFoundError(StatementParseError):
  def __init__(self, source=None):
    super().__init__(
      f"No transactions found in {source or 'the PDF'}; "
      "is this a Jago transaction history export?"
    )


class NoValidTransactionsError(StatementParseError):
  def __init__(self, chunk_count, source=None):
    self.chunk_count = chunk_count
    super().__init__(
      f"No valid transactions parsed from {source or 'the PDF'} "
      f"({chunk_count} candidate row(s) had no readable date)"
    )
