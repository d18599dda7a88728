"""Daily job: mark scheduled employees without a punch as absent.

Runs the service layer directly (no Flask). Meant for cron after closing time;
safe to run more than once for the same date. Future dates are rejected.

    python scripts/generate_absences.py 2024-01-10
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.time_clock.time_clock.common.datetime_utils import parse_iso_date
from src.time_clock.time_clock.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if len(sys.argv) != 2:
        raise SystemExit("Uso: python scripts/generate_absences.py AAAA-MM-DD")
    target = parse_iso_date(sys.argv[1])
    container = build_container(db_config=dict(settings.DB_CONFIG), token_secret=settings.SECRET_KEY)

    created = container.absence_generator.generate(target)
    print(f"OK: {len(created)} falta(s) registrada(s) em {target.isoformat()}")


if __name__ == "__main__":
    main()
