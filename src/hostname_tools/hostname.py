from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .errors import MalformedHostnameError, NoParentError
from .parser import parse as parse_text
from .validation import SEPARATOR, encoded_length, is_valid_label, validate_labels


@dataclass(frozen=True, repr=False)
class Hostname:
    """
    A validated hostname, stored as lowercase labels with the most specific
    label first: "www.example.com" is ("www", "example", "com").

    Build one with `Hostname.parse("www.example.com")` or
    `Hostname.from_labels(["www", "example", "com"])`; constructing with a
    label sequence directly validates it the same way. Instances are immutable
    and derived names (`parent`, `child`) are new instances.
    """

    labels: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", validate_labels(self.labels))

    # Factories

    @classmethod
    def parse(cls, text: str) -> Hostname:
        """Parse "example.com" or "example.com."; raises MalformedHostnameError."""
        return cls._from_parsed(parse_text(text))

    @classmethod
    def parse_or_none(cls, text: str) -> Hostname | None:
        """Like `parse`, but returns None for malformed or non-string input."""
        try:
            return cls.parse(text)
        except (MalformedHostnameError, TypeError):
            return None

    @classmethod
    def from_labels(cls, labels: Sequence[str]) -> Hostname:
        """Build from labels like ["example", "com"]; raises MalformedHostnameError."""
        return cls(labels)

    @classmethod
    def from_labels_or_none(cls, labels: Sequence[str]) -> Hostname | None:
        """Like `from_labels`, but returns None for malformed input or a bare string."""
        try:
            return cls.from_labels(labels)
        except (MalformedHostnameError, TypeError):
            return None

    @classmethod
    def _from_parsed(cls, labels: tuple[str, ...]) -> Hostname:
        # Parser output is already lowercased and size-checked.
        instance = cls.__new__(cls)
        object.__setattr__(instance, "labels", labels)
        return instance

    # Queries

    def size(self) -> int:
        """Number of characters in the dotted form, without a trailing dot."""
        return encoded_length(self.labels)

    def level_count(self) -> int:
        return len(self.labels)

    def __getitem__(self, index: int) -> str:
        return self.labels[index]

    def is_top_level_domain(self) -> bool:
        return self.level_count() == 1

    # Matching

    def has_tld(self, tlds: str | Iterable[str]) -> bool:
        """
        True when the last label is `tlds` (a single string) or one of `tlds`
        (any iterable of strings). Comparison ignores case.
        """
        if isinstance(tlds, str):
            tlds = (tlds,)
        return self.labels[-1] in {str(tld).lower() for tld in tlds}

    def is_subdomain_of(self, other: Hostname) -> bool:
        """
        True when `other` is a proper ancestor: self has more labels and ends
        with all of other's labels.
        """
        if self.level_count() <= other.level_count():
            return False
        return self.labels[-other.level_count() :] == other.labels

    # Ordering

    def compare(self, other: Hostname) -> int:
        """
        Return -1, 0 or 1. Labels are compared from the top-level domain
        inward; a name sorts after all of its ancestors.
        """
        for mine, theirs in zip(reversed(self.labels), reversed(other.labels)):
            if mine != theirs:
                return -1 if mine < theirs else 1
        if self.level_count() == other.level_count():
            return 0
        return -1 if self.level_count() < other.level_count() else 1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Hostname):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Hostname):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Hostname):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Hostname):
            return NotImplemented
        return self.compare(other) >= 0

    # Relatives

    def parent(self, depth: int = 1) -> Hostname:
        """
        Drop the `depth` most specific labels.

        Raises NoParentError for a top-level domain, and MalformedHostnameError
        when `depth` removes every label.
        """
        if depth < 1:
            raise ValueError("depth must be >= 1")
        if self.is_top_level_domain():
            raise NoParentError(self.to_text())
        return type(self).from_labels(self.labels[depth:])

    def parent_or_none(self, depth: int = 1) -> Hostname | None:
        try:
            return self.parent(depth)
        except (NoParentError, MalformedHostnameError):
            return None

    def child(self, label: str) -> Hostname:
        """Prepend `label`; raises MalformedHostnameError if the result is invalid."""
        if not is_valid_label(label):
            raise MalformedHostnameError("invalid label", reason="invalid_label", value=label)
        return type(self).from_labels((label, *self.labels))

    def child_or_none(self, label: str) -> Hostname | None:
        try:
            return self.child(label)
        except MalformedHostnameError:
            return None

    # Text form

    def to_text(self, fqn: bool = False) -> str:
        text = SEPARATOR.join(self.labels)
        return text + SEPARATOR if fqn else text

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_text()!r})"


__all__ = ["Hostname"]
