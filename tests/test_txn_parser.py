import unittest

from jagostatementconverter.config import ParserConfig
from jagostatementconverter.txn_parser import (
  extract_amount_and_balance,
  extract_transaction_ids,
  find_detail_phrase,
  parse_transaction,
)
from jagostatementconverter.txn_stream import TransactionChunk


def _chunk(*lines, page=1):
  return TransactionChunk(page=page, lines=list(lines))


class AmountBalanceTest(unittest.TestCase):
  def test_last_two_numeric_tokens(self):
    amount, balance, stripped = extract_amount_and_balance(
      'BUDI SANTOSO Transfer Masuk Gaji 5.704.768 28.369.768')
    self.assertEqual((amount, balance), (5704768, 28369768))
    self.assertEqual(stripped, 'BUDI SANTOSO Transfer Masuk Gaji')

  def test_position_independent_of_leading_text(self):
    for prefix in ('', 'A', 'a very long note with 12 words and a number 99 in it'):
      amount, balance, _ = extract_amount_and_balance(f"{prefix} -14.548 1.000.000".strip())
      self.assertEqual((amount, balance), (-14548, 1000000))

  def test_kerning_split_is_repaired(self):
    amount, balance, stripped = extract_amount_and_balance('Kopi 5.704. 768 28.369,10')
    self.assertEqual(amount, 5704768)
    self.assertAlmostEqual(balance, 28369.10)
    self.assertEqual(stripped, 'Kopi')

  def test_fewer_than_two_numbers(self):
    self.assertEqual(extract_amount_and_balance('Bunga  1.000'), (None, None, 'Bunga  1.000'))
    self.assertEqual(extract_amount_and_balance(''), (None, None, ''))


class DetailPhraseTest(unittest.TestCase):
  def test_longest_phrase_wins_at_same_position(self):
    phrases = sorted(['Transfer', 'Transfer Masuk'], key=len, reverse=True)
    self.assertEqual(find_detail_phrase('BUDI Transfer Masuk gaji', phrases), ('Transfer Masuk', 5))

  def test_contained_phrase_does_not_win(self):
    phrases = ParserConfig().sorted_phrases()
    self.assertEqual(find_detail_phrase('Pajak Bunga', phrases), ('Pajak Bunga', 0))

  def test_earliest_position_wins_over_longer_later_phrase(self):
    phrases = ParserConfig().sorted_phrases()
    self.assertEqual(find_detail_phrase('TOKO BUNGA MAWAR Pembayaran QRIS', phrases), ('Bunga', 5))

  def test_case_insensitive(self):
    phrases = ParserConfig().sorted_phrases()
    self.assertEqual(find_detail_phrase('toko pembayaran qris', phrases), ('Pembayaran QRIS', 5))

  def test_no_phrase(self):
    self.assertIsNone(find_detail_phrase('nothing to see', ParserConfig().sorted_phrases()))


class TransactionIdTest(unittest.TestCase):
  def test_dedup_in_order(self):
    text = '1 Jun 2021 A\nID#abc-1 ID# XYZ/2\nref ID#abc-1 ID#q_3'
    self.assertEqual(extract_transaction_ids(text), ['abc-1', 'XYZ/2', 'q_3'])

  def test_none(self):
    self.assertEqual(extract_transaction_ids('no ids here #ID'), [])


class ParseTransactionTest(unittest.TestCase):
  def test_wrapped_record(self):
    tx = parse_transaction(
      _chunk('17 Jun 2021', '18.01', 'BUDI SANTOSO Transfer Masuk Gaji bulan Juni', '5.704.768 28.369.768'),
      source_file='jago.pdf',
    )
    self.assertEqual(tx.date, '2021-06-17')
    self.assertEqual(tx.time, '18:01')
    self.assertEqual(tx.datetime, '2021-06-17 18:01')
    self.assertEqual(tx.amount, 5704768)
    self.assertEqual(tx.balance, 28369768)
    self.assertEqual(tx.source_or_destination, 'BUDI SANTOSO')
    self.assertEqual(tx.transaction_detail, 'Transfer Masuk')
    self.assertEqual(tx.note, 'Gaji bulan Juni')
    self.assertFalse(tx.is_reversal)
    self.assertEqual(tx.currency, 'IDR')
    self.assertEqual(tx.source_file, 'jago.pdf')

  def test_wrapped_record_ignores_id_line_after_figures(self):
    tx = parse_transaction(_chunk(
      '17 Jun 2021', '18.01', 'BUDI SANTOSO Transfer Masuk Gaji', '5.704.768 28.369.768', 'ID# 987654'))
    self.assertEqual((tx.amount, tx.balance), (5704768, 28369768))
    self.assertEqual(tx.note, 'Gaji')
    self.assertEqual(tx.transaction_id, '987654')

  def test_wrapped_record_ignores_remark_after_figures(self):
    tx = parse_transaction(_chunk(
      '1 Jul 2021', '07.45', 'Toko Buku Reversal POS', '14.548 28.369.768', 'Reversal transaksi 18 Jun'))
    self.assertEqual((tx.amount, tx.balance), (14548, 28369768))
    self.assertEqual(tx.source_or_destination, 'Toko Buku')
    self.assertEqual(tx.transaction_detail, 'Reversal POS')
    self.assertEqual(tx.note, '')
    self.assertTrue(tx.is_reversal)

  def test_wrapped_record_matches_single_line_record(self):
    wrapped = parse_transaction(_chunk('2 Agt 2022', '09:15', 'Kopi Pembayaran QRIS', '-35.000 1.200.500', 'ID#Q1'))
    single = parse_transaction(_chunk('2 Agt 2022 Kopi Pembayaran QRIS -35.000 1.200.500', '09:15 ID#Q1'))
    for name in ('amount', 'balance', 'source_or_destination', 'transaction_detail', 'note', 'time'):
      self.assertEqual(getattr(wrapped, name), getattr(single, name), name)

  def test_single_line_record(self):
    tx = parse_transaction(_chunk(
      '2 Agt 2022 Kopi Kenangan Pembayaran QRIS Meja 4 -35.000 1.200.500',
      '09:15 ID#QR123',
      page=4,
    ))
    self.assertEqual(tx.page, 4)
    self.assertEqual(tx.date, '2022-08-02')
    self.assertEqual(tx.time, '09:15')
    self.assertEqual(tx.amount, -35000)
    self.assertEqual(tx.balance, 1200500)
    self.assertEqual(tx.source_or_destination, 'Kopi Kenangan')
    self.assertEqual(tx.transaction_detail, 'Pembayaran QRIS')
    self.assertEqual(tx.note, 'Meja 4')
    self.assertEqual(tx.transaction_id, 'QR123')
    self.assertEqual(tx.transaction_ids, 'QR123')

  def test_time_on_first_line(self):
    tx = parse_transaction(_chunk('5 Des 2023 23.59 Bunga 1.234 10.001.234'))
    self.assertEqual(tx.time, '23:59')
    self.assertEqual(tx.transaction_detail, 'Bunga')
    self.assertEqual(tx.source_or_destination, '')
    self.assertEqual(tx.amount, 1234)

  def test_time_beyond_lookahead_is_ignored(self):
    tx = parse_transaction(_chunk('5 Des 2023 X Bunga 1 2', 'a', 'b', 'c', '10.00'))
    self.assertIsNone(tx.time)
    self.assertIsNone(tx.datetime)

  def test_degrades_without_numbers_or_label(self):
    tx = parse_transaction(_chunk('1 Mei 2024 sesuatu yang aneh'))
    self.assertIsNone(tx.amount)
    self.assertIsNone(tx.balance)
    self.assertIsNone(tx.transaction_id)
    self.assertIsNone(tx.transaction_ids)
    self.assertEqual(tx.transaction_detail, '')
    self.assertEqual(tx.source_or_destination, '')
    self.assertEqual(tx.note, 'sesuatu yang aneh')

  def test_reversal_anywhere_in_chunk(self):
    tx = parse_transaction(_chunk(
      '3 Mar 2023 TOKO Transaksi POS 50.000 100.000',
      '10.11',
      'ID#P1',
      'REVERSAL dari transaksi sebelumnya',
    ))
    self.assertTrue(tx.is_reversal)
    self.assertTrue(parse_transaction(_chunk('3 Mar 2023 Pembatalan Transaksi 1 2')).is_reversal)
    self.assertFalse(parse_transaction(_chunk('3 Mar 2023 irreversal 1 2')).is_reversal)

  def test_multiple_ids(self):
    tx = parse_transaction(_chunk('3 Mar 2023 A Transfer Keluar -1 2', 'ID#one', 'ID#two ID#one'))
    self.assertEqual(tx.transaction_id, 'one')
    self.assertEqual(tx.transaction_ids, 'one;two')

  def test_raw_text_kept(self):
    tx = parse_transaction(_chunk('3 Mar 2023 A', 'line two'))
    self.assertEqual(tx.raw_text, '3 Mar 2023 A\nline two')

  def test_rejects_chunk_without_date(self):
    self.assertIsNone(parse_transaction(_chunk('not a date line at all')))
    self.assertIsNone(parse_transaction(_chunk('17 Foo 2021 Transfer Masuk 1 2')))

  def test_custom_currency(self):
    tx = parse_transaction(_chunk('3 Mar 2023 A 1 2'), config=ParserConfig(currency='USD'))
    self.assertEqual(tx.currency, 'USD')


if __name__ == '__main__':
  unittest.main()
