"""Materialise due recurring expenses.

Intended to be run once a day by cron or any other scheduler. Running it more
than once on the same day is harmless: already generated expenses are skipped.

Run from the project root:
    python -m scripts.generate_fixed_expenses
    python -m scripts.generate_fixed_expenses --as-of 2025-01-01
"""

import argparse
import asyncio
import logging
import sys
from datetime import date

from rentledger.database import async_session_factory, engine
from rentledger.repositories.expenses import SqlExpenseStore
from rentledger.services.expense_generator import generate_due_expenses

logger = logging.getLogger("rentledger.scripts.generate_fixed_expenses")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate due recurring expenses.")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Reference date (YYYY-MM-DD). Defaults to today.",
    )
    return parser.parse_args(argv)


async def run(as_of: date) -> int:
    """Generate and commit the expenses due on ``as_of``. Returns how many were created."""
    try:
        async with async_session_factory() as session:
            generated = await generate_due_expenses(SqlExpenseStore(session), as_of)
            await session.commit()
    finally:
        await engine.dispose()
    return generated


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv)
    as_of = args.as_of or date.today()

    try:
        generated = asyncio.run(run(as_of))
    except Exception:
        logger.exception("Recurring expense generation failed")
        return 1

    logger.info("Done: %d expenses generated for %s", generated, as_of.isoformat())
    return 0


if __name__ == "__main__":
    sys.exit(main())
