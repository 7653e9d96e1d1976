from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

from .errors import MalformedHostnameError, NoParentError, ResolutionError
from .hostname import Hostname
from .resolution import family_from_name, resolve
from .version import get_version

_SCHEMA_VERSION = 1

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="hostname-tools")
    parser.add_argument("--version", action="version", version=get_version())
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for diagnostics written to stderr",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_parse = sub.add_parser("parse", help="Validate and normalize hostnames")
    p_parse.add_argument("names", nargs="+")
    p_parse.add_argument("--fqn", action="store_true", help="Print with a trailing dot")
    p_parse.add_argument("--json", action="store_true", help="Print one JSON object per name")
    p_parse.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Report invalid names on stderr but keep going and exit 0",
    )
    p_parse.set_defaults(func=_run_parse)

    p_compare = sub.add_parser("compare", help="Compare two hostnames (-1, 0 or 1)")
    p_compare.add_argument("left")
    p_compare.add_argument("right")
    p_compare.set_defaults(func=_run_compare)

    p_match = sub.add_parser("match", help="Exit 0 when every given predicate holds")
    p_match.add_argument("name")
    p_match.add_argument(
        "--tld",
        action="append",
        default=None,
        help="Accepted top-level domain (repeatable; any one must match)",
    )
    p_match.add_argument("--subdomain-of", default=None, help="Required ancestor domain")
    p_match.set_defaults(func=_run_match)

    p_sort = sub.add_parser("sort", help="Sort hostnames from the top-level domain inward")
    p_sort.add_argument(
        "--input",
        default="-",
        help="Path with one hostname per line ('#' comments allowed; '-' for stdin)",
    )
    p_sort.add_argument("--unique", action="store_true", help="Drop duplicate hostnames")
    p_sort.add_argument("--skip-invalid", action="store_true", help="Skip invalid lines")
    p_sort.set_defaults(func=_run_sort)

    p_parent = sub.add_parser("parent", help="Print the parent domain")
    p_parent.add_argument("name")
    p_parent.add_argument("--depth", type=int, default=1)
    p_parent.set_defaults(func=_run_parent)

    p_child = sub.add_parser("child", help="Print the name with a label prepended")
    p_child.add_argument("name")
    p_child.add_argument("label")
    p_child.set_defaults(func=_run_child)

    p_resolve = sub.add_parser("resolve", help="Resolve a hostname with the system resolver")
    p_resolve.add_argument("name")
    p_resolve.add_argument("--family", default="inet", choices=["any", "inet", "inet6"])
    p_resolve.add_argument("--timeout", type=float, default=None)
    p_resolve.add_argument("--json", action="store_true", help="Print one JSON object per entry")
    p_resolve.set_defaults(func=_run_resolve)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )
    return int(args.func(args))


def _hostname_record(hostname: Hostname) -> dict[str, object]:
    return {
        "hostname": hostname.to_text(),
        "labels": list(hostname.labels),
        "levels": hostname.level_count(),
        "size": hostname.size(),
        "tld": hostname[-1],
        "is_tld": hostname.is_top_level_domain(),
    }


def _run_parse(args: argparse.Namespace) -> int:
    invalid = 0
    for raw in args.names:
        try:
            hostname = Hostname.parse(str(raw))
        except MalformedHostnameError as e:
            print(f"error: {e}", file=sys.stderr)
            invalid += 1
            continue
        if args.json:
            sys.stdout.write(
                json.dumps({"schema_version": _SCHEMA_VERSION, **_hostname_record(hostname)})
                + "\n"
            )
        else:
            print(hostname.to_text(fqn=bool(args.fqn)))
    if invalid and not args.skip_invalid:
        return 2
    return 0


def _run_compare(args: argparse.Namespace) -> int:
    try:
        left = Hostname.parse(str(args.left))
        right = Hostname.parse(str(args.right))
    except MalformedHostnameError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(left.compare(right))
    return 0


def _run_match(args: argparse.Namespace) -> int:
    if not args.tld and args.subdomain_of is None:
        print("error: at least one of --tld/--subdomain-of is required", file=sys.stderr)
        return 2
    try:
        hostname = Hostname.parse(str(args.name))
        ancestor = None if args.subdomain_of is None else Hostname.parse(str(args.subdomain_of))
    except MalformedHostnameError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.tld and not hostname.has_tld(args.tld):
        return 1
    if ancestor is not None and not hostname.is_subdomain_of(ancestor):
        return 1
    return 0


def _run_sort(args: argparse.Namespace) -> int:
    try:
        if args.input == "-":
            hostnames = load_hostnames(sys.stdin, src="stdin", skip_invalid=bool(args.skip_invalid))
        else:
            path = Path(str(args.input))
            with path.open("r", encoding="utf-8") as fh:
                hostnames = load_hostnames(fh, src=str(path), skip_invalid=bool(args.skip_invalid))
    except FileNotFoundError as e:
        print(f"error: file not found: {e.filename}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.unique:
        hostnames = list(dict.fromkeys(hostnames))
    for hostname in sorted(hostnames):
        print(hostname.to_text())
    return 0


def load_hostnames(lines: Iterable[str], *, src: str, skip_invalid: bool) -> list[Hostname]:
    """
    Read one hostname per line.

    - Skips blank lines and lines starting with '#'.
    - Allows inline comments after '#'.
    """
    hostnames: list[Hostname] = []
    for lineno, raw_line in enumerate(lines, start=1):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            hostnames.append(Hostname.parse(line))
        except MalformedHostnameError as e:
            if skip_invalid:
                logger.info("skipping %s:%d: %s", src, lineno, e)
                continue
            raise ValueError(f"invalid hostname in {src}:{lineno}: {e}") from e
    return hostnames


def _run_parent(args: argparse.Namespace) -> int:
    try:
        hostname = Hostname.parse(str(args.name))
        parent = hostname.parent(int(args.depth))
    except NoParentError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(parent.to_text())
    return 0


def _run_child(args: argparse.Namespace) -> int:
    try:
        child = Hostname.parse(str(args.name)).child(str(args.label))
    except MalformedHostnameError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    print(child.to_text())
    return 0


def _run_resolve(args: argparse.Namespace) -> int:
    try:
        hostname = Hostname.parse(str(args.name))
        entries = resolve(
            hostname,
            family=family_from_name(str(args.family)),
            timeout=None if args.timeout is None else float(args.timeout),
        )
    except ResolutionError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        for entry in entries:
            sys.stdout.write(json.dumps({"hostname": hostname.to_text(), **entry.to_dict()}) + "\n")
    else:
        for addr in dict.fromkeys(entry.address for entry in entries):
            sys.stdout.write(f"{addr}\n")
    return 0 if entries else 1


if __name__ == "__main__":
    raise SystemExit(main())
