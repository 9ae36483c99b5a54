from __future__ import annotations


from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class DrawResult(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str | int
    cycle_type: str = Field(validation_alias=AliasChoices('cycle_type', 'cycleType'))
    draw_date: str = Field(validation_alias=AliasChoices('draw_date', 'drawDate'))
    your_tickets: int = Field(0, validation_alias=AliasChoices('your_tickets', 'yourTickets'))
    total_tickets: int = Field(0, validation_alias=AliasChoices('total_tickets', 'totalTickets'))
    won: bool = False
    prize: str | None = None
    prize_type: str | None = Field(None, validation_alias=AliasChoices('prize_type', 'prizeType'))
    winning_numbers: list[int] | None = Field(
        None, validation_alias=AliasChoices('winning_numbers', 'winningNumbers')
    )
    your_numbers: list[int] | None = Field(None, validation_alias=AliasChoices('your_numbers', 'yourNumbers'))


class TicketEarning(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str | int
    action: str
    tickets_earned: int = Field(0, validation_alias=AliasChoices('tickets_earned', 'ticketsEarned'))
    timestamp: str
    description: str = ''


class HistoryResponse(BaseModel):
    model_config = ConfigDict(extra='ignore')

    draws: list[DrawResult] = []
    earnings: list[TicketEarning] = []
