"""Periodic simulation runner.

Generates a mock bank SMS every ``--interval`` seconds and ingests it,
attributed to a randomly selected user. Each tick uses its own session so a
failed tick never poisons the next one.

Usage:
    python -m fintrack.scheduler --interval 30 --count 10
"""

import argparse
import asyncio
import logging

from fintrack.config import settings
from fintrack.core.exceptions import FintrackError
from fintrack.core.logging_setup import setup_logging
from fintrack.db.session import AsyncSessionLocal
from fintrack.generators.sms import MockSmsGenerator
from fintrack.services.ingestion import SmsIngestionService

logger = logging.getLogger(__name__)


async def run_once(generator: MockSmsGenerator, session_factory=AsyncSessionLocal) -> bool:
    """Generate and ingest one message. Returns True when it was recorded."""
    message = generator.generate()
    async with session_factory() as session:
        try:
            result = await SmsIngestionService(session).ingest(message)
        except FintrackError as e:
            logger.warning("Simulated SMS not ingested", extra={"error_code": e.error_code})
            return False

    logger.info(
        "Simulated SMS ingested",
        extra={
            "sms_log_id": str(result.sms_log_id),
            "risk_score": result.verdict.risk_score,
            "routing": result.routing.value,
        },
    )
    return True


async def run(
    interval: float,
    count: int | None = None,
    generator: MockSmsGenerator | None = None,
    session_factory=AsyncSessionLocal,
) -> int:
    """Run ``count`` ticks (forever when None). Returns how many were recorded."""
    generator = generator or MockSmsGenerator()
    recorded = 0
    tick = 0
    while count is None or tick < count:
        if tick:
            await asyncio.sleep(interval)
        if await run_once(generator, session_factory):
            recorded += 1
        tick += 1
    return recorded


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate and ingest mock bank SMS on a timer")
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.simulation_interval_seconds,
        help="Seconds between messages (default: %(default)s)",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Number of messages to generate (default: run until interrupted)",
    )
    args = parser.parse_args(argv)

    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info("Simulation started")
    try:
        recorded = asyncio.run(run(args.interval, args.count))
    except KeyboardInterrupt:
        logger.info("Simulation stopped")
        return
    logger.info(f"Simulation finished: {recorded} message(s) recorded")


if __name__ == "__main__":
    main()
