"""
Conversions between 1-based column numbers and spreadsheet letter labels
(1 -> A, 26 -> Z, 27 -> AA, 702 -> ZZ, 18278 -> ZZZ).
"""
from __future__ import annotations

ALPHABET_SIZE = 26
_FIRST_LETTER = ord("A")


def column_number_to_letter(column: int) -> str:
    """
    Bijective base-26: there is no zero digit, A..Z stand for 1..26.
    """
    if column < 1:
        raise ValueError(f"column number must be >= 1, got {column}")
    letters: list[str] = []
    n = column
    while n > 0:
        n, remainder = divmod(n - 1, ALPHABET_SIZE)
        letters.append(chr(_FIRST_LETTER + remainder))
    return "".join(reversed(letters))


def column_letter_to_number(letters: str) -> int:
    if not letters or not all("A" <= ch <= "Z" for ch in letters):
        raise ValueError(f"column label must be uppercase letters A-Z, got {letters!r}")
    result = 0
    for ch in letters:
        result = result * ALPHABET_SIZE + (ord(ch) - _FIRST_LETTER + 1)
    return result


def offset_column(base: str, offset: int) -> str:
    """
    Column `offset` places to the right of `base` (offset 0 is `base` itself).
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    return column_number_to_letter(column_letter_to_number(base) + offset)
