#!/usr/bin/env python3
"""Resolve a thread or an item status from a JSON-lines dump of events.

Usage:
    python scripts/resolve_events.py events.jsonl thread <event-id>
    python scripts/resolve_events.py events.jsonl status <item-id>

Each line of the dump is one event object as delivered by a relay.
"""

import argparse
import asyncio
import sys
from pathlib import Path

import logfire

from threadline.application.usecase.status import (
    GetItemStatusRequest,
    GetItemStatusUseCase,
)
from threadline.application.usecase.thread import GetThreadRequest, GetThreadUseCase
from threadline.config import Settings
from threadline.domain.model import Event
from threadline.domain.repository import EventRepository
from threadline.util.di.container import create_container
from threadline.util.logging import setup_logging
from threadline.util.observability import configure_logfire


async def run(dump: Path, command: str, event_id: str, settings: Settings) -> str:
    """Load the dump and run one use case against it."""
    container = create_container(settings)
    try:
        repository = await container.get(EventRepository)
        with dump.open(encoding="utf-8") as handle:
            for line in handle:
                if line.strip():
                    await repository.save(Event.model_validate_json(line))

        async with container() as request_container:
            if command == "thread":
                thread_use_case = await request_container.get(GetThreadUseCase)
                response = await thread_use_case.execute(
                    GetThreadRequest(event_id=event_id)
                )
            else:
                status_use_case = await request_container.get(GetItemStatusUseCase)
                response = await status_use_case.execute(
                    GetItemStatusRequest(item_id=event_id)
                )
        return response.model_dump_json(indent=2)
    finally:
        await container.close()


def main() -> int:
    """Parse arguments, resolve, and print the result as JSON."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("dump", type=Path, help="JSON-lines file of events")
    parser.add_argument("command", choices=["thread", "status"])
    parser.add_argument("event_id", help="Event id (thread) or item id (status)")
    args = parser.parse_args()

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        print(asyncio.run(run(args.dump, args.command, args.event_id, settings)))
        return 0
    except Exception as e:
        logfire.error(
            "Resolution failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
