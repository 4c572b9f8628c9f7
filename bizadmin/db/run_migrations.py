"""
Programmatic Alembic migration runner.

Allows running migrations without an alembic.ini by configuring the script location
to this package's migrations directory.

Usage examples:
    python -m bizadmin.db.run_migrations upgrade head
    python -m bizadmin.db.run_migrations downgrade -1
    python -m bizadmin.db.run_migrations history

`main` drives asyncio itself (through migrations/env.py); from async code call
`run_in_thread` instead.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from alembic import command
from alembic.config import Config

from bizadmin.db.config import get_settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# command name -> (alembic command, default arguments)
COMMANDS: Dict[str, Tuple[Callable[..., object], List[str]]] = {
    "upgrade": (command.upgrade, ["head"]),
    "downgrade": (command.downgrade, ["-1"]),
    "stamp": (command.stamp, ["head"]),
    "history": (command.history, []),
    "current": (command.current, []),
    "heads": (command.heads, []),
    "revision": (command.revision, []),
}


# PUBLIC_INTERFACE
def build_config(database_url: Optional[str] = None) -> Config:
    """Return an Alembic Config pointing at the bundled migrations."""
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    # Used by offline mode; env.py builds its own async engine online.
    cfg.set_main_option("sqlalchemy.url", database_url or get_settings().sync_database_url)
    return cfg


# PUBLIC_INTERFACE
def main(argv: Optional[List[str]] = None) -> None:
    """Run Alembic command with programmatic configuration."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.exit("No Alembic arguments provided. Example: upgrade head")

    cmd, other = args[0], args[1:]
    if cmd not in COMMANDS:
        sys.exit(f"Unsupported Alembic command: {cmd} (expected one of {', '.join(sorted(COMMANDS))})")

    func, defaults = COMMANDS[cmd]
    logger.info("alembic %s %s", cmd, " ".join(other or defaults))
    func(build_config(), *(other or defaults))


# PUBLIC_INTERFACE
async def run_in_thread(argv: List[str]) -> None:
    """Run `main(argv)` in a worker thread so env.py can start its own event loop."""
    await asyncio.to_thread(main, argv)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
