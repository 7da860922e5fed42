# fastsales/core/context.py

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import Depends
from sqlalchemy.orm import Session

from fastsales.core.config import Settings, settings
from fastsales.database import get_db


class Clock:
    """Current date and time in the server's reference time zone."""

    def __init__(self, tz_name: str = "UTC"):
        self.tz = ZoneInfo(tz_name)

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()


@dataclass
class LedgerContext:
    db: Session
    clock: Clock


def get_settings() -> Settings:
    return settings


def get_clock(app_settings: Settings = Depends(get_settings)) -> Clock:
    return Clock(app_settings.TIMEZONE)


def get_context(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> LedgerContext:
    return LedgerContext(db=db, clock=clock)
