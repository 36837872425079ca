"""Tunables for the statement parser.

Defaults mirror the Jago "Pockets transactions history" export layout.
"""

from dataclasses import dataclass
from typing import List, Tuple

BACKENDS = ('pymupdf', 'pdfplumber')

# Rows containing any of these (lower-cased) are page furniture, not data
SKIP_CONTAINS = (
  'pockets transactions history',
  'pt bank jago',
  'www.jago.com',
  'menampilkan transaksi',
  'info penting',
  'dokumen ini adalah',
)

SKIP_PREFIXES = (
  'halaman ',
  'tanggal & waktu',
  'saldo terbaru',
)

# Column header row: both words must appear
SKIP_ALL_OF = (
  ('sumber/tujuan', 'rincian'),
)

DETAIL_PHRASES = (
  'Pembayaran dengan Jago Pay',
  'Pembayaran Produk Digital',
  'Isi Saldo Dompet Digital',
  'Tambah Uang Kantong',
  'Tarik Uang Kantong',
  'Pembatalan Transaksi',
  'Pembayaran QRIS',
  'Transaksi POS',
  'Transfer Masuk',
  'Transfer Keluar',
  'Reversal POS',
  'Pajak Bunga',
  'Bunga',
)


@dataclass
class ParserConfig:
  backend: str = 'pymupdf'
  y_precision: int = 0
  time_lookahead: int = 3
  progress_every: int = 50
  currency: str = 'IDR'
  max_workers: int = 1
  skip_contains: Tuple[str, ...] = SKIP_CONTAINS
  skip_prefixes: Tuple[str, ...] = SKIP_PREFIXES
  skip_all_of: Tuple[Tuple[str, ...], ...] = SKIP_ALL_OF
  detail_phrases: Tuple[str, ...] = DETAIL_PHRASES

  def __post_init__(self):
    if self.backend not in BACKENDS:
      raise ValueError(f"Unknown backend {self.backend!r}, expected one of {', '.join(BACKENDS)}")
    if self.max_workers < 1:
      raise ValueError('max_workers must be at least 1')
    if self.progress_every < 1:
      raise ValueError('progress_every must be at least 1')

  def sorted_phrases(self) -> List[str]:
    """Detail phrases, longest first so a longer label wins over one it contains."""
    return sorted(self.detail_phrases, key=len, reverse=True)
