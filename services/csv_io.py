# services/csv_io.py
"""
CSV helpers shared by the ledger and contractor import/export endpoints.

Rows are numbered the way a spreadsheet shows them: the header is row 1, so
the first data row is row 2.
"""
import csv
import io
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import ValidationError

MAX_AMOUNT = Decimal("9999999999.99")


def decode_upload(raw: bytes) -> str:
     """Uploaded bytes as text; a UTF-8 BOM written by spreadsheet tools is dropped."""
     try:
          return raw.decode("utf-8-sig")
     except UnicodeDecodeError:
          raise ValidationError("CSV file must be UTF-8 encoded")


def read_rows(text: str, required_headers: Sequence[str]) -> Iterator[Tuple[int, Dict[str, str]]]:
     """
     Yield (row number, {header: stripped value}) for every non-blank data row.

     Raises:
          ValidationError: no data rows, or a required header is missing
     """
     lines = [line for line in text.splitlines() if line.strip()]
     if len(lines) < 2:
          raise ValidationError("CSV file must have a header row and at least one data row")

     reader = csv.DictReader(io.StringIO("\n".join(lines)), skipinitialspace=True)
     headers = [h.strip() for h in (reader.fieldnames or [])]
     missing = [h for h in required_headers if h not in headers]
     if missing:
          raise ValidationError(f"CSV is missing required headers. Must include: {', '.join(required_headers)}")
     reader.fieldnames = headers

     for row_number, row in enumerate(reader, start=2):
          yield row_number, {key: (value or "").strip() for key, value in row.items() if key is not None}


def parse_amount(value: str) -> Optional[Decimal]:
     """Non-negative amount rounded to cents, or None when it is not a number."""
     try:
          amount = Decimal(value.replace("$", "").replace(",", ""))
     except InvalidOperation:
          return None
     if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
          return None
     return amount.quantize(Decimal("0.01"))


def parse_date(value: str) -> Optional[date]:
     """Leading YYYY-MM-DD of a date or ISO timestamp, or None."""
     try:
          parsed = date.fromisoformat(value[:10])
     except ValueError:
          return None
     return parsed if parsed.year >= 1900 else None


def write_rows(headers: List[str], rows) -> str:
     buffer = io.StringIO()
     writer = csv.writer(buffer, lineterminator="\n")
     writer.writerow(headers)
     writer.writerows(rows)
     return buffer.getvalue()
