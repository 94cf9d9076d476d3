"""Example: use the service layer directly (without Flask).

Controllers are a thin layer; registration rules live in the services and the ledger.
"""

import importlib

from config import get_settings_module

from src.climbclub.climbclub.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(data_config={"data_file": settings.DATA_FILE}, admin_password_hash="")

    for row in container.session_service.registration_board()[:5]:
        occ = row["occupancy"]
        cap = occ["capacity"] or "-"
        print(f"{row['date']} {row['discipline']:<22} {occ['registered']}/{cap}")


if __name__ == "__main__":
    main()
