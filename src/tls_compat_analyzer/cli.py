from __future__ import annotations

import argparse
import json
import logging
import ssl
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import settings
from .models import TlsVersion
from .reporting import CollectingReporter, LoggingReporter, MultiReporter
from .store import StoreError, open_store
from .walker import walk


def _write_output(out_path: str | None, payload: Any) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if out_path:
        Path(out_path).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tls-compat-analyzer",
        description="Check the certificates of a credential store against a TLS version.",
    )
    p.add_argument("store", nargs="?", help="PEM/DER file, directory of certificates, or PKCS#12 keystore")
    p.add_argument(
        "--tls-version",
        "-t",
        default=None,
        help=f"TLS version to check against (default: {settings.default_tls_version})",
    )
    p.add_argument("--password", "-p", help="Keystore password (default: $TLS_COMPAT_STORE_PASSWORD)")
    p.add_argument("--out", "-o", help="Write JSON output to file (default: stdout)")
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help=f"Log level for stderr (default: {settings.LOG_LEVEL})",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    if args.version:
        print(__version__)
        return 0

    logging.basicConfig(
        level=args.log_level or settings.LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.store:
        print("Error: a credential store path is required", file=sys.stderr)
        return 1

    try:
        version = TlsVersion.parse(args.tls_version or settings.default_tls_version)
        store = open_store(args.store, args.password or settings.STORE_PASSWORD or None)
    except (ValueError, StoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    collector = CollectingReporter()
    summary = walk(store, version, MultiReporter(collector, LoggingReporter()))

    payload = {
        "store": str(args.store),
        "version": __version__,
        "tls": {"version": version.value, "openssl": ssl.OPENSSL_VERSION},
        "summary": summary.to_dict(),
        "results": collector.results,
        "errors": [
            f"{r['name']}: {r.get('error', 'not found')}" for r in collector.results if r["verdict"] is None
        ],
    }

    if summary.total == 0:
        payload["errors"].append("no certificates found in store")

    _write_output(args.out, payload)
    if summary.total == 0:
        return 1
    return 0 if summary.all_compatible else 2


if __name__ == "__main__":
    raise SystemExit(main())
