# ABOUTME: ISBN-10/ISBN-13 normalization, checksum validation, and cross-derivation.
# ABOUTME: Produces the canonical IsbnData pair for a BookQuery without any I/O.

import re

from bookmeld.metadata.types import BookQuery, IsbnData

INVALID_ISBN10_NOTE = "Invalid ISBN-10"
INVALID_ISBN13_NOTE = "Invalid ISBN-13"

# Bookland prefix shared by every ISBN-10 once expressed as an ISBN-13.
_BOOKLAND_PREFIX = "978"

_NON_ISBN_CHARS_RE = re.compile(r"[^0-9X]")
_NINE_DIGITS_RE = re.compile(r"^\d{9}$")
_THIRTEEN_DIGITS_RE = re.compile(r"^\d{13}$")


def normalize_isbn(value: str | None) -> str | None:
    """Strip everything but digits and 'X' (case-insensitive).

    Returns None when nothing is left.
    """
    if not value:
        return None
    cleaned = _NON_ISBN_CHARS_RE.sub("", str(value).upper())
    return cleaned or None


def isbn10_check_char(isbn9: str) -> str:
    """Compute the ISBN-10 check character for the first nine digits."""
    total = sum((10 - index) * int(isbn9[index]) for index in range(9))
    check = 11 - total % 11
    if check == 10:
        return "X"
    if check == 11:
        return "0"
    return str(check)


def isbn13_check_digit(isbn12: str) -> str:
    """Compute the ISBN-13 check digit for the first twelve digits."""
    total = sum(
        int(digit) * (1 if index % 2 == 0 else 3) for index, digit in enumerate(isbn12[:12])
    )
    return str((10 - total % 10) % 10)


def is_valid_isbn10(value: str | None) -> bool:
    if not value or len(value) != 10:
        return False
    if not _NINE_DIGITS_RE.match(value[:9]):
        return False
    return value[9] == isbn10_check_char(value[:9])


def is_valid_isbn13(value: str | None) -> bool:
    if not value or not _THIRTEEN_DIGITS_RE.match(value):
        return False
    return value[12] == isbn13_check_digit(value[:12])


def derive_isbn13(isbn10: str | None) -> str | None:
    """Expand an ISBN-10 into its 978-prefixed ISBN-13."""
    if not isbn10 or len(isbn10) != 10:
        return None
    core = _BOOKLAND_PREFIX + isbn10[:9]
    return core + isbn13_check_digit(core)


def derive_isbn10(isbn13: str | None) -> str | None:
    """Collapse a 978-prefixed ISBN-13 into an ISBN-10.

    Other prefixes (979 and friends) have no ISBN-10 form, so this returns
    None for them rather than failing.
    """
    if not isbn13 or len(isbn13) != 13 or not isbn13.startswith(_BOOKLAND_PREFIX):
        return None
    core = isbn13[3:12]
    return core + isbn10_check_char(core)


def select_isbn13(isbns: list[str] | None) -> str | None:
    """Pick a 13-character ISBN from a source's list, else its first entry."""
    if not isbns:
        return None
    for value in isbns:
        if value and len(value) == 13:
            return value
    return isbns[0] or None


def resolve_isbn(query: BookQuery | None, fallback_isbn: str | None = None) -> IsbnData:
    """Build the canonical ISBN pair for a query.

    Raw values that fail their checksum are dropped and noted. A fallback ISBN
    (typically discovered by a free-text search) only fills an empty slot and
    only when it validates on its own. Whatever is still missing afterwards is
    derived from the other half of the pair.
    """
    notes: list[str] = []
    raw10 = normalize_isbn(query.isbn10_raw if query else None)
    raw13 = normalize_isbn(query.isbn13_raw if query else None)
    isbn10: str | None = None
    isbn13: str | None = None

    if raw10:
        if is_valid_isbn10(raw10):
            isbn10 = raw10
        else:
            notes.append(INVALID_ISBN10_NOTE)

    if raw13:
        if is_valid_isbn13(raw13):
            isbn13 = raw13
        else:
            notes.append(INVALID_ISBN13_NOTE)

    fallback = normalize_isbn(fallback_isbn)
    if fallback:
        if isbn13 is None and is_valid_isbn13(fallback):
            isbn13 = fallback
        if isbn10 is None and is_valid_isbn10(fallback):
            isbn10 = fallback

    if isbn13 is None and isbn10:
        isbn13 = derive_isbn13(isbn10)
    if isbn10 is None and isbn13:
        isbn10 = derive_isbn10(isbn13)

    return IsbnData(isbn10=isbn10, isbn13=isbn13, notes=tuple(notes))
