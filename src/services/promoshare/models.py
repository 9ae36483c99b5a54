"""Normalized PromoShare shapes shared by every surface."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CycleType(str, Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    GRAND = 'grand'


class RewardType(str, Enum):
    GEM = 'gem'
    KEY = 'key'
    POINT = 'point'
    COUPON = 'coupon'
    PRODUCT = 'product'
    OTHER = 'other'

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return cls.OTHER


class PoolItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | int | None = None
    reward_type: RewardType = RewardType.OTHER
    amount: int | float = Field(0, ge=0)
    description: str = ''
    sponsor_name: str | None = None
    image_url: str | None = None


class Draw(BaseModel):
    """One lottery cycle as the client sees it (read-only snapshot)."""

    model_config = ConfigDict(frozen=True)

    id: str | int
    cycle_type: CycleType
    end_at: datetime
    jackpot_amount: int | float = Field(0, ge=0)
    is_rollover: bool = False
    user_tickets: int = Field(0, ge=0)
    total_tickets: int = Field(0, ge=0)
    ticket_numbers: list[int] = []
    pool_items: list[PoolItem] = []

    @field_validator('end_at')
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


@dataclass(frozen=True)
class Remaining:
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @property
    def is_settling(self) -> bool:
        """True once the draw's end has passed and settlement is pending."""
        return not (self.days or self.hours or self.minutes or self.seconds)
