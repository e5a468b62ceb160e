"""
nearstock CLI entrypoint.

Intended for quick checks and debugging without running the API server.
It delegates to the same pipeline the API uses (`nearstock.fulfillment.service`).
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from nearstock.config.settings import get_settings
from nearstock.core.errors import StockCheckError
from nearstock.core.logging import configure_logging
from nearstock.fulfillment.selector import select_nearest
from nearstock.fulfillment.service import run_stock_check
from nearstock.ingestion.commerce_client import CommerceClient
from nearstock.ingestion.geocoding_client import GeocodingClient


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the `check` subcommand."""
    settings = get_settings()
    status, body = run_stock_check(
        args.pincode,
        args.product_id,
        settings=settings,
        geocoder=GeocodingClient(settings),
        commerce=CommerceClient(settings),
    )

    if args.json:
        print(json.dumps({"status": status, "body": body}, ensure_ascii=False, indent=2))
    elif "message" in body:
        print(f"{body['message']} (quantity={body['quantity']})")
    else:
        print(f"[{status}] {body.get('error')}")
    return 0 if status == 200 else 1


def _cmd_nearest(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        point = GeocodingClient(settings).resolve(args.pincode)
    except StockCheckError as exc:
        print(f"error: {exc}")
        return 1

    nearest = select_nearest(point, settings.warehouses.registry)
    if nearest is None:
        print("error: no warehouses configured")
        return 1
    print(f"{args.pincode} -> lat={point.latitude:.4f} lon={point.longitude:.4f}")
    print(f"nearest warehouse: {nearest.postal_code} ({nearest.distance_m / 1000:.1f} km)")
    return 0


def _cmd_warehouses(_: argparse.Namespace) -> int:
    warehouses = get_settings().warehouses
    names_by_code: dict[str, list[str]] = {}
    for name, code in warehouses.location_map.items():
        names_by_code.setdefault(code, []).append(name)

    for code, point in warehouses.registry.items():
        names = ", ".join(names_by_code.get(code, [])) or "-"
        print(f"{code}  lat={point.latitude:.6f} lon={point.longitude:.6f}  {names}")

    problems = warehouses.consistency_problems()
    for problem in problems:
        print(f"warning: {problem}")
    return 1 if problems else 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the nearstock CLI."""
    parser = argparse.ArgumentParser(prog="nearstock")
    sub = parser.add_subparsers(dest="command", required=True)

    chk = sub.add_parser("check", help="Find the warehouse that can fulfill a product for a pincode.")
    chk.add_argument("--pincode", required=True)
    chk.add_argument("--product-id", required=True, help="Commerce product ID (e.g. gid://shopify/Product/123)")
    chk.add_argument("--json", action="store_true", help="Output the HTTP-equivalent status and body as JSON")
    chk.set_defaults(func=_cmd_check)

    near = sub.add_parser("nearest", help="Geocode a pincode and show the nearest configured warehouse.")
    near.add_argument("--pincode", required=True)
    near.set_defaults(func=_cmd_nearest)

    wh = sub.add_parser("warehouses", help="List configured warehouses and mapping problems.")
    wh.set_defaults(func=_cmd_warehouses)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m nearstock.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
