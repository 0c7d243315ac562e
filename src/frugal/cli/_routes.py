"""``frugal routes``: list installed controller routes.

Prints one row per binding: method, full path, success status and the
``Controller.method`` that handles it.
"""

import argparse
import sys

from frugal.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [
        (b.method.value, b.path, str(b.status), f"{b.controller}.{b.handler_name}")
        for b in app.routes
    ]
    if not rows:
        print("No routes registered.")
        return

    headers = ("METHOD", "PATH", "STATUS", "HANDLER")
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headers[:3])]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"

    print(fmt.format(*headers))
    print("-" * min(sum(widths) + 6 + max(len(r[3]) for r in rows), 80))
    for row in rows:
        print(fmt.format(*row))
