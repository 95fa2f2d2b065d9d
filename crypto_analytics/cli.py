#!/usr/bin/env python3
"""
Crypto Analytics CLI — dataset summary, static JSON export, and API server.

USAGE:
  python -m crypto_analytics.cli summary                   # Rows, source, market-cap stats
  python -m crypto_analytics.cli export                    # Write every view to public/
  python -m crypto_analytics.cli export --output ./dist    # Custom output directory
  python -m crypto_analytics.cli serve                     # Start API server
  python -m crypto_analytics.cli serve --port 8000 --reload
"""
from __future__ import annotations

import argparse
import json
import os
from datetime import datetime
from pathlib import Path

from crypto_analytics.config import COINS_MAX_LIMIT, HISTOGRAM_DEFAULT_BINS, SCATTER_DEFAULT_BINS
from crypto_analytics.config import SCATTER_DEFAULT_X, SCATTER_DEFAULT_Y, WORDMAP_DEFAULT_LIMIT
from crypto_analytics.config import configure_logging
from crypto_analytics.data.store import DataStore
from crypto_analytics.analytics.common import format_number, sanitize_for_json
from crypto_analytics.analytics.coins import list_coins
from crypto_analytics.analytics.heatmap import heatmap
from crypto_analytics.analytics.histogram import market_cap_histogram
from crypto_analytics.analytics.scatter import scatter
from crypto_analytics.analytics.wordmap import wordmap


def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(sanitize_for_json(data), indent=2))


def cmd_summary(args):
    """Print dataset size and market-cap distribution."""
    store = DataStore().load()
    dataset = store.dataset
    print("\n" + "=" * 70)
    print("  CRYPTO ANALYTICS — DATASET SUMMARY")
    print("=" * 70)
    if dataset.is_empty:
        print("  No data loaded. Place a CSV at data/crypto_market_full.csv or data.csv.")
        return

    print(f"  Source:  {dataset.source}")
    print(f"  Rows:    {len(dataset):,}")
    print(f"  Columns: {len(dataset.columns)} ({len(dataset.numeric_columns())} numeric)")
    if dataset.schema.unknown_columns:
        print(f"  Unknown: {', '.join(dataset.schema.unknown_columns)}")

    stats = market_cap_histogram(dataset, HISTOGRAM_DEFAULT_BINS)["statistics"]
    if stats["count"]:
        print(f"\n  Market cap ({stats['count']:,} coins)")
        for key in ("min", "p25", "median", "mean", "p75", "max"):
            print(f"    {key:<7} {format_number(stats[key]):>10}")
    print("=" * 70 + "\n")


def cmd_export(args):
    """Pre-compute every view with default parameters as static JSON."""
    out = Path(args.output)
    out.mkdir(parents=True, exist_ok=True)

    store = DataStore().load()
    dataset = store.dataset
    print(f"\n  Exporting {len(dataset):,} rows to {out.resolve()}")
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")

    _write_json(out / "health.json", {
        "status": "ok" if not dataset.is_empty else "empty",
        "rows": len(dataset),
        "columns": len(dataset.columns),
        "source": str(dataset.source) if dataset.source else None,
    })
    _write_json(out / "coins.json", list_coins(dataset, page=1, limit=COINS_MAX_LIMIT))
    _write_json(out / "histogram.json", market_cap_histogram(dataset, HISTOGRAM_DEFAULT_BINS))
    _write_json(out / "scatter.json", scatter(dataset, SCATTER_DEFAULT_X, SCATTER_DEFAULT_Y, SCATTER_DEFAULT_BINS))
    _write_json(out / "heatmap.json", heatmap(dataset))
    _write_json(out / "wordmap.json", wordmap(dataset, WORDMAP_DEFAULT_LIMIT))
    print("  Wrote health, coins, histogram, scatter, heatmap, wordmap\n")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Crypto Analytics API on port {args.port}...")
    uvicorn.run("crypto_analytics.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crypto Analytics — market dataset analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    summary_parser = subparsers.add_parser("summary", help="Print dataset summary")
    summary_parser.set_defaults(func=cmd_summary)

    export_parser = subparsers.add_parser("export", help="Export every view as static JSON")
    export_parser.add_argument("--output", default="public", help="Output directory (default: public)")
    export_parser.set_defaults(func=cmd_export)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
