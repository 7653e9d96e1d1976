from __future__ import annotations

import string
from typing import Sequence

from .errors import MalformedHostnameError

MAX_LABEL_LENGTH = 63
MAX_NAME_LENGTH = 253
MAX_LABELS = 127
SEPARATOR = "."

_ALNUM = frozenset(string.ascii_letters + string.digits)
_LABEL_CHARS = _ALNUM | {"-", "_"}


def is_boundary_char(char: str) -> bool:
    """First and last character of a label: ASCII letter or digit."""
    return char in _ALNUM


def is_label_char(char: str) -> bool:
    """Any character allowed inside a label: ASCII letter, digit, '-' or '_'."""
    return char in _LABEL_CHARS


def is_valid_label(label: str) -> bool:
    if not isinstance(label, str):
        return False
    if not label or len(label) > MAX_LABEL_LENGTH:
        return False
    if not is_boundary_char(label[0]) or not is_boundary_char(label[-1]):
        return False
    return all(is_label_char(c) for c in label)


def encoded_length(labels: Sequence[str]) -> int:
    """Label characters plus one separator between each pair of labels."""
    if not labels:
        return 0
    return sum(len(label) for label in labels) + len(labels) - 1


def validate_sizes(labels: Sequence[str]) -> tuple[str, ...]:
    """
    Check the whole-name limits shared by text and label input.

    - at least one label, at most 127
    - encoded length (labels plus separators) within [1, 253]
    """
    if not labels:
        raise MalformedHostnameError("hostname has no labels", reason="empty_sequence")
    if len(labels) > MAX_LABELS:
        raise MalformedHostnameError(
            f"hostname has too many labels (max {MAX_LABELS})",
            reason="too_many_labels",
            value=len(labels),
        )
    length = encoded_length(labels)
    if length < 1 or length > MAX_NAME_LENGTH:
        raise MalformedHostnameError(
            f"hostname is too long (max {MAX_NAME_LENGTH} characters)",
            reason="total_length",
            value=length,
        )
    return tuple(labels)


def validate_labels(labels: Sequence[str]) -> tuple[str, ...]:
    """
    Validate an already-split label sequence, most specific label first.

    Returns the labels lowercased so that names differing only in case compare
    and hash the same.
    """
    if isinstance(labels, (str, bytes)):
        raise TypeError("labels must be a sequence of strings, not a single string")
    labels = list(labels)
    for label in labels:
        if not isinstance(label, str):
            raise MalformedHostnameError("invalid label", reason="invalid_label", value=label)
    validate_sizes(labels)
    for label in labels:
        if not is_valid_label(label):
            raise MalformedHostnameError("invalid label", reason="invalid_label", value=label)
    return tuple(label.lower() for label in labels)


__all__ = [
    "MAX_LABELS",
    "MAX_LABEL_LENGTH",
    "MAX_NAME_LENGTH",
    "SEPARATOR",
    "encoded_length",
    "is_boundary_char",
    "is_label_char",
    "is_valid_label",
    "validate_labels",
    "validate_sizes",
]
