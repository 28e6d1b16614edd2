"""CSV parsing for Google Sheets exports.

Sheet exports quote any cell containing a delimiter, a quote or a line
break, and free-text columns (damage descriptions, needs lists) hit all
three. Splitting on commas or lines first breaks those cells apart, so
everything goes through one left-to-right scan with a quote flag.
"""

DELIMITER = ","
QUOTE = '"'


def parse_csv(text: str) -> list[list[str]]:
    """Parse CSV text into rows of trimmed string cells.

    - ``""`` inside a quoted section is a literal quote.
    - Delimiters and line breaks inside quotes are kept verbatim.
    - ``\\n`` and ``\\r\\n`` both end a row; blank rows are dropped.
    - An unterminated quote swallows the rest of the input into the
      current cell instead of raising.
    """
    rows: list[list[str]] = []
    row: list[str] = []
    cell: list[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        char = text[i]

        if char == QUOTE:
            if in_quotes and i + 1 < n and text[i + 1] == QUOTE:
                cell.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif in_quotes:
            cell.append(char)
        elif char == DELIMITER:
            row.append("".join(cell).strip())
            cell = []
        elif char == "\n" or (char == "\r" and i + 1 < n and text[i + 1] == "\n"):
            row.append("".join(cell).strip())
            cell = []
            if _has_content(row):
                rows.append(row)
            row = []
            if char == "\r":
                i += 1
        else:
            cell.append(char)
        i += 1

    row.append("".join(cell).strip())
    if _has_content(row):
        rows.append(row)

    return rows


def _has_content(row: list[str]) -> bool:
    # A line holding only whitespace parses as a single empty cell
    return len(row) > 1 or bool(row[0])
