from __future__ import annotations

from .errors import MalformedHostnameError
from .validation import (
    MAX_LABEL_LENGTH,
    SEPARATOR,
    is_boundary_char,
    is_label_char,
    validate_sizes,
)


def parse(text: str) -> tuple[str, ...]:
    """
    Split hostname text into lowercase labels, most specific first.

    Accepts "example.com" and the fully-qualified "example.com."; a single
    trailing dot is dropped and not counted as a label.

    Raises MalformedHostnameError on the first character that cannot belong to
    a valid hostname.
    """
    if not isinstance(text, str):
        raise TypeError("hostname text must be a string")

    labels: list[str] = []
    buf: list[str] = []
    pos = 0
    end = len(text)

    while pos < end:
        char = text[pos]
        if char == SEPARATOR:
            if not buf:
                raise MalformedHostnameError(
                    f"empty label at position {pos}", reason="empty_label", value=text
                )
            labels.append(_finish_label(buf, text))
            buf = []
        elif not is_label_char(char):
            raise MalformedHostnameError(
                f"invalid character {char!r} at position {pos}",
                reason="invalid_character",
                value=text,
            )
        elif not buf and not is_boundary_char(char):
            raise MalformedHostnameError(
                f"label must start with a letter or digit (position {pos})",
                reason="bad_boundary",
                value=text,
            )
        elif len(buf) == MAX_LABEL_LENGTH:
            raise MalformedHostnameError(
                f"label is too long (max {MAX_LABEL_LENGTH} characters)",
                reason="label_too_long",
                value=text,
            )
        else:
            buf.append(char.lower())
        pos += 1

    if buf:
        labels.append(_finish_label(buf, text))
    elif not labels:
        # "" never opened a label; "." is caught above as an empty label.
        raise MalformedHostnameError("hostname is empty", reason="empty_sequence", value=text)

    return validate_sizes(labels)


def _finish_label(buf: list[str], text: str) -> str:
    if not is_boundary_char(buf[-1]):
        raise MalformedHostnameError(
            "label must end with a letter or digit", reason="bad_boundary", value=text
        )
    return "".join(buf)


__all__ = ["parse"]
