"""
Build the catalog snapshot.

Walks the card database, logs the load report and writes the snapshot JSON
(same shape as GET /catalog) for kiosks served as static files.
"""

import argparse
import logging
import sys
from pathlib import Path

from tcgkiosk.api.snapshot import build_snapshot
from tcgkiosk.config import settings
from tcgkiosk.models.catalog import LoadStatus
from tcgkiosk.services.catalog_loader import load_catalog

logger = logging.getLogger(__name__)


def run_build(root: Path, output: Path | None = None) -> int:
    """
    Build the catalog at root and write its snapshot.

    Args:
        root: Card database directory
        output: Destination file, stdout when None

    Returns:
        Number of cards in the snapshot
    """
    logger.info("Building catalog from %s...", root)
    catalog = load_catalog(root)

    for outcome in catalog.report.outcomes:
        if outcome.status in (LoadStatus.MALFORMED, LoadStatus.UNREADABLE):
            logger.warning("%s: %s (%s)", outcome.path, outcome.status.value, outcome.reason)

    payload = build_snapshot(catalog).model_dump_json(by_alias=True)

    if output is None:
        sys.stdout.write(payload + "\n")
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload, encoding="utf-8")
        logger.info("Wrote snapshot to %s", output)

    total = catalog.report.total_cards
    logger.info("Snapshot complete. %d cards in %d games", total, len(catalog.groups))
    return total


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Build the TCG kiosk catalog snapshot")
    parser.add_argument("--root", type=Path, default=settings.database_path)
    parser.add_argument("--output", type=Path, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    run_build(args.root, args.output)


if __name__ == "__main__":
    main()
