import argparse
import logging
import sys

from .config import BACKENDS, ParserConfig
from .converter import JagoStatementConverter
from .exceptions import StatementParseError


def _print_progress(event):
  phase = event['phase']
  if 'current' in event:
    print(f"{phase}: {event['current']}/{event['total']}", file=sys.stderr)
  else:
    print(f"{phase}: {event.get('message', '')}", file=sys.stderr)


def main(argv=None):
  parser = argparse.ArgumentParser(description='Convert Jago transaction history PDFs to CSV')
  parser.add_argument('pdfs', nargs='+', help='Input PDF files')
  parser.add_argument('--output', required=True, help='Output CSV file')
  parser.add_argument('--backend', choices=BACKENDS, default='pymupdf', help='PDF text reader')
  parser.add_argument('--workers', type=int, default=1, help='Threads used to parse rows')
  parser.add_argument('--verbose', action='store_true', help='Debug logging')
  args = parser.parse_args(argv)

  logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                      format='%(levelname)s | %(message)s')

  converter = JagoStatementConverter(ParserConfig(backend=args.backend, max_workers=args.workers))
  try:
    converter.convert_to_csv(args.pdfs, args.output, progress_callback=_print_progress)
  except StatementParseError as e:
    print(f"error: {e}", file=sys.stderr)
    return 1
  return 0


if __name__ == '__main__':
  sys.exit(main())
