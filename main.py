"""
Command-line bond browser.

Runs a single catalogue query:
  1. Load configuration from the environment (and ``.env``).
  2. Load and validate the bond file.
  3. Filter and sort the catalogue.
  4. Print the listing with maturity projections.
  5. Optionally value a paper-trading purchase and save the results.

Usage::

    uv run main.py --risk Low --sort price-asc
    uv run main.py --search metro --min-return 7 --max-return 9 --verbose
    uv run main.py --bond-id 2 --units 4 --output outcomes/quote.json
"""
import argparse
import json
import os
import sys
from typing import Any, Dict

from dotenv import load_dotenv
from loguru import logger

# Ensure the src directory is importable when running from a checkout.
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from mudra.analysis.report import catalog_frame  # noqa: E402
from mudra.catalog.engine import BondCatalogEngine  # noqa: E402
from mudra.catalog.schemas import SortKey  # noqa: E402
from mudra.data.adapters.json_repository import JsonBondRepository  # noqa: E402
from mudra.utils.config import CatalogConfig  # noqa: E402
from mudra.utils.logger import setup_logger  # noqa: E402


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mudra: Bond Catalogue Browser")
    parser.add_argument("--data-file", type=str, default=None,
                        help="Bond JSON file (overrides MUDRA_BONDS_FILE)")
    parser.add_argument("--search", type=str, default=None,
                        help="Substring of bond name or issuer")
    parser.add_argument("--risk", type=str, default=None,
                        help="Risk tier: Low, Medium or High")
    parser.add_argument("--sector", type=str, default=None,
                        help="Substring of sector name")
    parser.add_argument("--min-return", type=str, default=None,
                        help="Minimum annual return rate (percent)")
    parser.add_argument("--max-return", type=str, default=None,
                        help="Maximum annual return rate (percent)")
    parser.add_argument("--sort", type=str, default=None,
                        choices=[k.value for k in SortKey],
                        help="Listing order")
    parser.add_argument("--include-inactive", action="store_true",
                        help="Also list bonds flagged inactive")
    parser.add_argument("--bond-id", type=str, default=None,
                        help="Value a purchase of this bond")
    parser.add_argument("--units", type=int, default=1,
                        help="Units to value with --bond-id")
    parser.add_argument("--output", type=str, default=None,
                        help="Write the results to this JSON file")
    parser.add_argument("--verbose", action="store_true",
                        help="Echo DEBUG logs to the terminal")
    return parser


def save_json(data: Dict[str, Any], path: str) -> None:
    """Serialise *data* as pretty-printed JSON to *path*."""
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=str)
    logger.success(f"Saved {path}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    load_dotenv()
    args = build_parser().parse_args()

    try:
        config = CatalogConfig.from_env()
        setup_logger(
            config.log_dir,
            console_level="DEBUG" if args.verbose else "INFO",
        )

        repository = JsonBondRepository(
            data_file=args.data_file or config.data_file,
            include_inactive=args.include_inactive or config.include_inactive,
        )
        engine = BondCatalogEngine(repository, default_sort=config.default_sort)

        page = engine.browse(
            {
                "search": args.search,
                "risk": args.risk,
                "sector": args.sector,
                "minReturn": args.min_return,
                "maxReturn": args.max_return,
            },
            sort_key=args.sort,
        )

        print(f"Showing {page.matched} of {page.total} bonds "
              f"(sectors: {', '.join(page.sectors)})")
        if page.bonds:
            print(catalog_frame(page.bonds).to_string(index=False))
        else:
            logger.warning("No bonds match the current filters.")

        result: Dict[str, Any] = {
            "count": page.matched,
            "total": page.total,
            "sort": page.sort_key.value,
            "data": [b.model_dump(mode="json", by_alias=True) for b in page.bonds],
        }

        if args.bond_id:
            quote = engine.quote(args.bond_id, units=args.units)
            logger.info(
                f"{quote.units} x '{quote.bond.name}' costs {quote.cost:,.2f}; "
                f"worth {quote.projection.maturity_value:,.2f} after "
                f"{quote.bond.maturity_years} years "
                f"(+{quote.projection.total_return:,.2f})"
            )
            result["quote"] = quote.model_dump(mode="json", by_alias=True)

        if args.output:
            save_json(result, args.output)

    except Exception as e:
        logger.exception(f"Catalogue run failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
