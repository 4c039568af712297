"""
CSV Export

Pure transformation of an ordered transaction list into CSV text.
Callers pass the view the user is looking at (filtered and sorted);
rows come out in exactly that order.

Amounts use a plain decimal point with two digits regardless of the
display formatting used elsewhere in the app.
"""

import csv
import io
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Union

from accountant.logger import get_logger
from accountant.models.transaction import Transaction


EXPORT_FILENAME = "transactions.csv"
CSV_CONTENT_TYPE = "text/csv"
CSV_HEADER = ("Date", "Name", "Category", "Type", "Amount")

_TWO_PLACES = Decimal("0.01")

logger = get_logger(__name__)


def _row(transaction: Transaction) -> list[str]:
    return [
        transaction.local_date.strftime("%Y-%m-%d"),
        transaction.description,
        transaction.category,
        transaction.type.value,
        f"{transaction.amount.quantize(_TWO_PLACES):f}",
    ]


def export_csv(transactions: Iterable[Transaction]) -> str:
    """
    Render transactions as CSV.

    Fields containing a comma, a double quote or a line break are
    wrapped in double quotes with embedded quotes doubled. Rows are
    separated by a single newline; there is no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for transaction in transactions:
        writer.writerow(_row(transaction))

    text = buffer.getvalue()
    return text[:-1] if text.endswith("\n") else text


def write_csv(
    transactions: Iterable[Transaction],
    path: Union[str, Path],
) -> Path:
    """Write the CSV export to `path` as UTF-8 and return the path."""
    path = Path(path)
    transactions = list(transactions)
    path.write_text(export_csv(transactions), encoding="utf-8", newline="")
    logger.info("transactions_exported", path=str(path), count=len(transactions))
    return path
