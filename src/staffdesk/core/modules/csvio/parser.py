"""The one CSV scanner used by imports and previews.

Handles quoted cells with commas, doubled quotes and line breaks, CRLF or LF
line endings and a leading UTF-8 BOM. Blank lines are dropped and short rows
are padded so every row has a value for every header.
"""

from dataclasses import dataclass, field

BOM = "\ufeff"


@dataclass
class CsvTable:
    headers: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def split_records(text: str) -> list[list[str]]:
    """Split CSV text into records of raw cells."""
    records: list[list[str]] = []
    record: list[str] = []
    cell: list[str] = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if in_quotes:
            if char == '"':
                if i + 1 < length and text[i + 1] == '"':
                    cell.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                cell.append(char)
        elif char == '"':
            in_quotes = True
        elif char == ",":
            record.append("".join(cell))
            cell = []
        elif char in "\r\n":
            if char == "\r" and i + 1 < length and text[i + 1] == "\n":
                i += 1
            record.append("".join(cell))
            records.append(record)
            record, cell = [], []
        else:
            cell.append(char)
        i += 1

    if cell or record:
        record.append("".join(cell))
        records.append(record)
    return records


def _is_blank(record: list[str]) -> bool:
    return all(not value.strip() for value in record)


def unique_headers(headers: list[str]) -> list[str]:
    """Suffix repeated header names so every column keeps its own key: Phone, Phone_2, Phone_3."""
    seen: set[str] = set()
    result = []
    for header in headers:
        name = header
        suffix = 2
        while name in seen:
            name = f"{header}_{suffix}"
            suffix += 1
        seen.add(name)
        result.append(name)
    return result


def parse_csv(text: str) -> CsvTable:
    """Parse CSV text into headers and header-keyed rows.

    Header names and cell values are trimmed. Repeated headers are renamed by
    unique_headers. Cells past the last header are dropped.
    """
    text = text.removeprefix(BOM)
    records = [record for record in split_records(text) if not _is_blank(record)]
    if not records:
        return CsvTable(headers=[])

    headers = unique_headers([header.strip() for header in records[0]])
    rows = []
    for record in records[1:]:
        padded = record + [""] * (len(headers) - len(record))
        rows.append({header: padded[index].strip() for index, header in enumerate(headers)})
    return CsvTable(headers=headers, rows=rows)


def decode_csv(data: bytes) -> str:
    """Decode an uploaded file, falling back to latin-1 for non-UTF-8 spreadsheets."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")
