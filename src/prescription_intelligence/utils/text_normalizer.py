# ============================================================================
# src/prescription_intelligence/utils/text_normalizer.py
# ============================================================================
"""
Text Normalization Utilities

Turns the raw OCR blob into the ordered line sequence every later stage
works on. Line breaks are meaningful in prescriptions (one medication per
line, instructions on the lines below), so they are kept; only surrounding
whitespace and blank lines are removed.
"""

from typing import List, Optional, Sequence


def normalize_lines(text: Optional[str]) -> List[str]:
    """
    Split raw text into trimmed, non-empty lines, preserving order.

    Handles \\n, \\r\\n and \\r line endings.
    """
    if not text:
        return []
    lines = (line.strip() for line in text.splitlines())
    return [line for line in lines if line]


def join_lines(lines: Sequence[str]) -> str:
    """Rebuild normalized text from a line sequence."""
    return "\n".join(lines)
