"""Command line lookup against the Google Geocoding API.

Reads ``GOOGLE_MAPS_API_KEY`` (and the other ``GEOCODING_*`` settings) from the
environment or ``.env``::

    python -m scripts.tools.geocode_lookup --address "1600 Amphitheatre Parkway"
    python -m scripts.tools.geocode_lookup --latlng 37.4220,-122.0841 --json
    python -m scripts.tools.geocode_lookup --clear-cache

Exit status is 0 on success, 1 when the lookup returned an error and 2 on
usage errors.
"""

from __future__ import annotations

import argparse
import contextlib
import json
import sys
from collections.abc import Sequence
from typing import TextIO

from geocode_client.core.config import Settings
from geocode_client.core.exceptions import is_geocode_error
from geocode_client.dto.response import GeocodeResponse
from geocode_client.logging import get_logger, setup_logging
from geocode_client.services.geocode import GeocodingClient

# Kept under the library logger so --verbose output includes it
logger = get_logger("geocode_client.tools.geocode_lookup")


def _latlng(value: str) -> tuple[float, float]:
    parts = value.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError("expected LAT,LNG")
    try:
        lat, lng = (float(part) for part in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid coordinates: {value}") from exc
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        raise argparse.ArgumentTypeError(f"coordinates out of range: {value}")
    return lat, lng


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Geocode an address or reverse geocode coordinates")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--address", type=str, help="Address to geocode")
    target.add_argument(
        "--latlng",
        type=_latlng,
        metavar="LAT,LNG",
        help="Coordinates to reverse geocode",
    )
    target.add_argument(
        "--clear-cache",
        nargs="?",
        const="",
        default=None,
        metavar="IDENTIFIER",
        help="Clear one cached lookup (e.g. geocode_<address>) or every entry",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Bypass the cache for this lookup",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print machine readable output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logs for cache and request handling",
    )
    return parser


def summarize(response: GeocodeResponse) -> dict:
    coordinates = response.get_coordinates()
    return {
        "status": response.get_status(),
        "results": response.result_count,
        "coordinates": coordinates.model_dump() if coordinates else None,
        "location_type": response.get_location_type(),
        "place_id": response.get_place_id(),
        "plus_code": response.get_plus_code_global(),
        "address": response.get_structured_address().model_dump(),
    }


def _print_text(summary: dict, out: TextIO) -> None:
    if not summary["results"]:
        print(f"{summary['status']}: no results", file=out)
        return
    address = summary["address"]
    print(address["formatted_address"] or "-", file=out)
    coordinates = summary["coordinates"]
    if coordinates:
        print(f"  lat/lng: {coordinates['latitude']},{coordinates['longitude']}", file=out)
    for key, value in address.items():
        if key != "formatted_address" and value is not None:
            print(f"  {key}: {value}", file=out)


def run(
    argv: Sequence[str] | None = None,
    *,
    client: GeocodingClient | None = None,
    out: TextIO = sys.stdout,
    err: TextIO = sys.stderr,
) -> int:
    parser = _build_parser()
    try:
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    setup_logging(level="DEBUG" if args.verbose else None)

    if client is None:
        config = Settings()
        if not config.google_maps_api_key:
            print("GOOGLE_MAPS_API_KEY is not set", file=err)
            return 2
        client = GeocodingClient.from_settings(config)

    with client:
        if args.no_cache:
            client.cache_enabled = False

        if args.clear_cache is not None:
            error = client.clear_cache(args.clear_cache or None)
            if error is not None:
                print(error.message, file=err)
                return 1
            print("cache cleared", file=out)
            return 0

        if args.address is not None:
            result = client.geocode(args.address)
        else:
            result = client.reverse_geocode(*args.latlng)

    if is_geocode_error(result):
        logger.debug("geocode_lookup_failed", kind=result.kind)
        print(result.message, file=err)
        return 1

    summary = summarize(result)
    if args.json:
        print(json.dumps(summary, ensure_ascii=False, indent=2), file=out)
    else:
        _print_text(summary, out)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
