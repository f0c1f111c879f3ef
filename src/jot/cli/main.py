# src/jot/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then dispatches argv to the command registry.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..errors import ConfigError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    args = list(sys.argv[1:] if argv is None else argv)

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.debug("Starting %s argv=%s", settings.app_name, args)

    state = create_initial_state(settings=settings)

    try:
        reply = registry.handle(state, args)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    if reply.text:
        print(reply.text)
    return reply.exit_code


if __name__ == "__main__":
    sys.exit(main())
