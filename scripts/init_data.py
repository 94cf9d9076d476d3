"""Create the club data file with sample sessions and members.

Does nothing if the file already exists.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.climbclub.climbclub.database.bootstrap import ensure_data_file
from src.climbclub.climbclub.database.connection import JsonFileConnection, StoreConfig


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    settings = importlib.import_module(get_settings_module())
    conn = JsonFileConnection.get_instance(StoreConfig(data_file=Path(settings.DATA_FILE)))

    created = ensure_data_file(conn, seed=True)
    print(f"OK: {'Created' if created else 'Kept existing'} data file -> {conn.path}")


if __name__ == "__main__":
    main()
