from pydantic import BaseModel, field_validator
from typing import Optional, Union
from datetime import datetime
from decimal import Decimal

def to_local_naive(moment: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes become naive local time; naive ones are taken as local already."""
    if moment is None or moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def as_wall_clock(moment: Optional[datetime]) -> Optional[datetime]:
    """
    Journal timestamps are stored as wall-clock time. Any zone attached on
    the way out (TIMESTAMPTZ, a trailing "Z") is dropped, not applied.
    """
    if moment is None or moment.tzinfo is None:
        return moment
    return moment.replace(tzinfo=None)


class TradeRecord(BaseModel):
    """
    Journal entry as seen by the analytics core.
    A null pnl means the position is still open.
    """
    id: Union[int, str]
    account_id: Optional[Union[int, str]] = None
    pnl: Optional[Decimal] = None
    opened_at: Optional[datetime] = None  # entry created
    settled_at: Optional[datetime] = None  # outcome last written

    @field_validator("opened_at", "settled_at")
    @classmethod
    def _drop_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_wall_clock(value)

    @property
    def is_closed(self) -> bool:
        return self.pnl is not None
