from __future__ import annotations

from .errors import AddressNotFoundError, MalformedHostnameError, NoParentError, ResolutionError
from .hostname import Hostname
from .parser import parse
from .validation import validate_labels

__all__ = [
    "AddressNotFoundError",
    "Hostname",
    "MalformedHostnameError",
    "NoParentError",
    "ResolutionError",
    "parse",
    "validate_labels",
]
