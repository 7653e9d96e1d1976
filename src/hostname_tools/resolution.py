from __future__ import annotations

import ipaddress
import logging
import queue
import socket
import threading
from dataclasses import dataclass
from typing import Any

from .errors import AddressNotFoundError, ResolutionError
from .hostname import Hostname

logger = logging.getLogger(__name__)

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

_FAMILIES = {
    "any": socket.AF_UNSPEC,
    "inet": socket.AF_INET,
    "inet6": socket.AF_INET6,
}


@dataclass(frozen=True)
class ResolvedAddress:
    address: IPAddress
    socktype: int
    proto: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": str(self.address),
            "socktype": int(self.socktype),
            "proto": int(self.proto),
        }


def family_from_name(name: str) -> int:
    try:
        return _FAMILIES[name]
    except KeyError:
        raise ValueError(f"unknown address family: {name!r}") from None


def resolve(
    hostname: Hostname,
    *,
    family: int = socket.AF_INET,
    socktype: int = socket.SOCK_STREAM,
    proto: int = socket.IPPROTO_IP,
    timeout: float | None = None,
) -> list[ResolvedAddress]:
    """
    Look up `hostname` with the system resolver.

    `timeout` bounds the wait for getaddrinfo(), which has no timeout of its
    own; the lookup runs in a daemon thread that is abandoned when it expires,
    so a hung lookup never keeps the process alive.
    """
    if timeout is not None and timeout <= 0:
        raise ValueError("timeout must be > 0")

    name = hostname.to_text()
    logger.debug("resolving %s (family=%s socktype=%s proto=%s)", name, family, socktype, proto)
    try:
        if timeout is None:
            infos = socket.getaddrinfo(name, None, family, socktype, proto)
        else:
            infos = _getaddrinfo_with_timeout(name, family, socktype, proto, timeout)
    except socket.gaierror as e:
        not_found_errnos = {
            errno
            for errno in (getattr(socket, "EAI_NONAME", None), getattr(socket, "EAI_NODATA", None))
            if errno is not None
        }
        logger.debug("resolution of %s failed: %s", name, e)
        if e.errno in not_found_errnos:
            raise AddressNotFoundError(f"no address found for {name}", code=e.errno) from e
        raise ResolutionError(f"getaddrinfo: {e.strerror or e}", code=e.errno) from e
    except TimeoutError as e:
        logger.debug("resolution of %s timed out after %ss", name, timeout)
        raise ResolutionError(f"resolution of {name} timed out") from e
    except OSError as e:
        raise ResolutionError(str(e), code=e.errno) from e

    results: list[ResolvedAddress] = []
    for info_family, info_socktype, info_proto, _canonname, sockaddr in infos:
        if info_family not in (socket.AF_INET, socket.AF_INET6):
            continue
        results.append(
            ResolvedAddress(
                address=ipaddress.ip_address(sockaddr[0]),
                socktype=info_socktype,
                proto=info_proto,
            )
        )
    logger.debug("resolved %s to %d entries", name, len(results))
    return results


def addresses(hostname: Hostname, **kwargs: Any) -> list[IPAddress]:
    """Resolved addresses without duplicates, in resolver order."""
    return list(dict.fromkeys(r.address for r in resolve(hostname, **kwargs)))


def address(hostname: Hostname, **kwargs: Any) -> IPAddress:
    """First resolved address; raises AddressNotFoundError when there is none."""
    found = addresses(hostname, **kwargs)
    if not found:
        raise AddressNotFoundError(f"no address found for {hostname.to_text()}")
    return found[0]


def address_or_none(hostname: Hostname, **kwargs: Any) -> IPAddress | None:
    try:
        return address(hostname, **kwargs)
    except ResolutionError:
        return None


def _getaddrinfo_with_timeout(
    name: str, family: int, socktype: int, proto: int, timeout: float
) -> list[tuple[Any, ...]]:
    results: queue.Queue[tuple[bool, Any]] = queue.Queue(maxsize=1)

    def lookup() -> None:
        try:
            results.put((True, socket.getaddrinfo(name, None, family, socktype, proto)))
        except Exception as e:
            results.put((False, e))

    threading.Thread(target=lookup, name=f"getaddrinfo-{name}", daemon=True).start()
    try:
        ok, value = results.get(timeout=timeout)
    except queue.Empty:
        raise TimeoutError(f"getaddrinfo did not finish within {timeout}s") from None
    if not ok:
        raise value
    return value


__all__ = [
    "ResolvedAddress",
    "address",
    "address_or_none",
    "addresses",
    "family_from_name",
    "resolve",
]
