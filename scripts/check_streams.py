# check_streams.py
import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from relay_api.relay import probe
from relay_api.stations import load_stations
from relay_api.utils import candidates_for, is_stream_url

load_dotenv()


def check(url):
    attempts = probe(candidates_for(url))
    label = url or "(default station)"
    print(f"📻 {label}")
    for a in attempts:
        mark = "✅" if a.ok else "❌"
        extra = f" -> {a.redirected_to}" if a.redirected_to else ""
        detail = a.status if a.ok else a.error
        print(f"  {mark} [{a.cursor + 1}] {a.url}{extra} ({detail})")
    return [
        {"url": a.url, "ok": a.ok, "status": a.status, "redirected_to": a.redirected_to, "error": a.error}
        for a in attempts
    ]


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Probe upstream stream candidates.")
    parser.add_argument("--url", help="Stream URL to check (defaults to the default station)")
    parser.add_argument("--all", action="store_true", help="Check every registered station")
    parser.add_argument("--output", help="Write results as JSON to this file")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    if args.url and not is_stream_url(args.url):
        parser.error("--url must be an absolute http(s) URL")

    urls = list(load_stations()) if args.all else [args.url]
    report = {url or "default": check(url) for url in urls}

    if args.output:
        with open(args.output, "w") as f:
            json.dump(report, f, indent=2)
        print(f"Saved results to {args.output}")

    all_down = [u for u, rows in report.items() if not any(r["ok"] for r in rows)]
    sys.exit(1 if all_down else 0)
