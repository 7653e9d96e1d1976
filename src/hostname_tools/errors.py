from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MalformedHostnameError(ValueError):
    message: str
    reason: str = "malformed"
    value: object = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.value is None:
            return self.message
        return f"{self.message}: {self.value!r}"


@dataclass(frozen=True)
class NoParentError(LookupError):
    hostname: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"no parent for top-level domain {self.hostname!r}"


@dataclass(frozen=True)
class ResolutionError(Exception):
    message: str
    code: int | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.code is None:
            return self.message
        return f"{self.message} (code={self.code})"


@dataclass(frozen=True)
class AddressNotFoundError(ResolutionError):
    pass


__all__ = [
    "AddressNotFoundError",
    "MalformedHostnameError",
    "NoParentError",
    "ResolutionError",
]
