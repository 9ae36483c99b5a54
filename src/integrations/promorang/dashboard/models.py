from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PoolItemPayload(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str | int | None = None
    reward_type: str | None = Field(None, validation_alias=AliasChoices('reward_type', 'rewardType', 'type'))
    amount: int | float | None = None
    description: str | None = None
    image_url: str | None = Field(None, validation_alias=AliasChoices('image_url', 'imageUrl'))
    sponsor_name: str | None = Field(None, validation_alias=AliasChoices('sponsor_name', 'sponsorName'))


class DrawPayload(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str | int | None = None
    cycle_type: str | None = Field(None, validation_alias=AliasChoices('cycle_type', 'cycleType'))
    status: str | None = None
    start_at: str | None = Field(None, validation_alias=AliasChoices('start_at', 'startAt'))
    end_at: str | int | float | None = Field(None, validation_alias=AliasChoices('end_at', 'endAt'))
    jackpot_amount: int | float | None = Field(
        None, validation_alias=AliasChoices('jackpot_amount', 'jackpotAmount')
    )
    is_rollover: bool | None = Field(None, validation_alias=AliasChoices('is_rollover', 'isRollover'))
    user_tickets: int | None = Field(None, validation_alias=AliasChoices('user_tickets', 'userTickets'))
    total_tickets: int | None = Field(None, validation_alias=AliasChoices('total_tickets', 'totalTickets'))
    ticket_numbers: list[int] | None = Field(
        None, validation_alias=AliasChoices('ticket_numbers', 'ticketNumbers')
    )
    pool_items: list[PoolItemPayload] | None = Field(
        None, validation_alias=AliasChoices('pool_items', 'poolItems')
    )


class ActiveCyclePayload(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str | int | None = None
    cycle_type: str | None = Field(None, validation_alias=AliasChoices('cycle_type', 'cycleType'))
    status: str | None = None
    start_at: str | None = Field(None, validation_alias=AliasChoices('start_at', 'startAt'))
    end_at: str | int | float | None = Field(None, validation_alias=AliasChoices('end_at', 'endAt'))


class RecentWinner(BaseModel):
    model_config = ConfigDict(extra='ignore')

    username: str
    prize: str
    date: str


class DashboardPayload(BaseModel):
    """Dashboard body: either the multi-draw shape or the legacy single-cycle shape."""

    model_config = ConfigDict(extra='ignore')

    # Raw entries, validated one by one as DrawPayload during normalization
    draws: list[Any] | None = None

    # Legacy single-cycle fields
    active_cycle: ActiveCyclePayload | None = Field(
        None, validation_alias=AliasChoices('active_cycle', 'activeCycle')
    )
    user_tickets: int | None = Field(None, validation_alias=AliasChoices('user_tickets', 'userTickets'))
    total_tickets: int | None = Field(None, validation_alias=AliasChoices('total_tickets', 'totalTickets'))
    pool_items: list[PoolItemPayload] | None = Field(
        None, validation_alias=AliasChoices('pool_items', 'poolItems')
    )
    current_jackpot: int | float | None = Field(
        None, validation_alias=AliasChoices('current_jackpot', 'currentJackpot')
    )
    is_rollover: bool | None = Field(None, validation_alias=AliasChoices('is_rollover', 'isRollover'))
    ticket_numbers: list[int] | None = Field(
        None, validation_alias=AliasChoices('ticket_numbers', 'ticketNumbers')
    )

    recent_winners: list[RecentWinner] = Field(
        [], validation_alias=AliasChoices('recent_winners', 'recentWinners')
    )
