from __future__ import annotations

import asyncio
import logging

from dotenv import load_dotenv

from reversi.models import Disk, PlayerMode
from reversi.notifications import EventLogNotifier
from reversi.session import GameSession, GameStatus
from reversi.settings import Settings, settings_from_env


logger = logging.getLogger(__name__)


async def run_self_play(settings: Settings) -> GameStatus:
    """Play a full automated-vs-automated game without any animation driver."""

    notifier = EventLogNotifier(auto_acknowledge=True)
    session = GameSession.from_settings(settings, notifier=notifier)

    session.new_game()
    for side in Disk.sides():
        session.set_player_mode(side, PlayerMode.automated)

    await session.executor.wait_idle()

    dark, light = session.counts()
    status = session.status()
    logger.info("Final count dark=%d light=%d: %s", dark, light, status.message)
    return status


def main() -> None:
    load_dotenv(override=False)
    settings = settings_from_env()

    # Configure logging
    logging.basicConfig(level=settings.log_level)

    status = asyncio.run(run_self_play(settings))
    print(status.message)


if __name__ == "__main__":
    main()
