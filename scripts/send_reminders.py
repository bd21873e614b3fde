#!/usr/bin/env python3
"""
Daily WhatsApp reminder job.

Usage:
  python3 scripts/send_reminders.py              # today's confirmed bookings
  python3 scripts/send_reminders.py --date 2026-01-28

Meant to run from cron at 09:00 business time.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from salon_booking.application.utils.dates import parse_day
from salon_booking.core.config import settings
from salon_booking.wiring.dependencies import get_send_reminders_use_case


def main() -> None:
    parser = argparse.ArgumentParser(description="Send booking reminders for a day.")
    parser.add_argument("--date", help="Day to remind (YYYY-MM-DD). Defaults to today in BUSINESS_TIMEZONE.")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    day = parse_day(args.date) if args.date else None
    sent = get_send_reminders_use_case().execute(day)
    print(f"Reminders sent: {sent}")


if __name__ == "__main__":
    main()
