"""Backup the club data file into backups/ with a timestamp."""

from __future__ import annotations

import importlib
import shutil
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.climbclub.climbclub.common.datetime_utils import timestamp


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    data_file = Path(settings.DATA_FILE)
    if not data_file.exists():
        raise SystemExit(f"No data file at {data_file}; nothing to back up.")

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    out_file = out_dir / f"{data_file.stem}_{timestamp()}.json"
    shutil.copy2(data_file, out_file)
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
