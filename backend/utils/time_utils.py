import os
from datetime import datetime

import pytz
from dotenv import load_dotenv

load_dotenv()

APP_TIMEZONE = pytz.timezone(os.getenv("APP_TIMEZONE", "UTC"))


def now() -> datetime:
    """Current time in the configured application timezone."""
    return datetime.now(APP_TIMEZONE)


def start_of_month(moment: datetime = None) -> datetime:
    moment = moment or now()
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
