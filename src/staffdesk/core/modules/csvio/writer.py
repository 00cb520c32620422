import csv
import io
from collections.abc import Iterable, Sequence

from staffdesk.core.modules.csvio.parser import BOM


def write_csv(headers: Sequence[str], rows: Iterable[Sequence[object]], bom: bool = True) -> str:
    """Render rows as CSV with every value quoted, optionally prefixed with a UTF-8 BOM for Excel."""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])
    content = output.getvalue()
    return BOM + content if bom else content
