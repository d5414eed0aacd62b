"""
Letter helpers shared across the variant service.

Row labels, answer-key letters and printed alternative letters all use the
same 0 -> 'A' mapping.
"""

from variant_service.core.constants import MAX_ROWS, MIN_ROWS
from variant_service.core.exceptions import ValidationError


def index_to_letter(index: int) -> str:
    """
    Convert a 0-based index to a letter (0 -> 'A', 1 -> 'B', etc.).

    Args:
        index: 0-based index.

    Returns:
        Corresponding uppercase letter.

    Raises:
        ValueError: If index is out of range [0, 25].
    """
    if not (0 <= index <= 25):
        raise ValueError(f"Index must be in [0, 25], got {index}")
    return chr(ord("A") + index)


def letter_to_index(letter: str) -> int:
    """
    Convert a letter to a 0-based index ('A' -> 0, 'b' -> 1, etc.).

    Lowercase letters are accepted since printed sheets label alternatives
    a), b), c)...

    Raises:
        ValueError: If letter is not a single A-Z / a-z character.
    """
    if len(letter) != 1 or not letter.isascii() or not letter.isalpha():
        raise ValueError(f"Letter must be A-Z, got '{letter}'")
    return ord(letter.upper()) - ord("A")


def alternative_letter(index: int) -> str:
    """Printed label of the alternative at a 0-based position (0 -> 'a')."""
    return index_to_letter(index).lower()


def row_label(index: int) -> str:
    """Label of the row at a 0-based position (0 -> 'A')."""
    if not (MIN_ROWS - 1 <= index < MAX_ROWS):
        raise ValidationError(
            f"Row index must be in [0, {MAX_ROWS - 1}], got {index}"
        )
    return index_to_letter(index)


def row_labels(row_count: int) -> list[str]:
    """Sequential row labels starting at 'A'."""
    return [row_label(i) for i in range(row_count)]


def is_row_label(label: str) -> bool:
    return len(label) == 1 and "A" <= label <= index_to_letter(MAX_ROWS - 1)
