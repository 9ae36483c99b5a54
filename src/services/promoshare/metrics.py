"""Figures derived from draws that the backend does not send directly."""

from src.integrations.promorang.history.models import DrawResult, TicketEarning
from src.services.promoshare.models import Draw


def combined_jackpot(draws: list[Draw]) -> int | float:
    return sum((draw.jackpot_amount for draw in draws), 0)


def total_user_tickets(draws: list[Draw]) -> int:
    return sum((draw.user_tickets for draw in draws), 0)


def win_probability_percent(draw: Draw) -> float:
    """
    Viewer's share of the draw's tickets in percent, one decimal place.

    Zero when no tickets were issued; capped at 100 for inconsistent counts.
    """
    if draw.total_tickets <= 0:
        return 0.0
    percent = draw.user_tickets / draw.total_tickets * 100
    return round(min(percent, 100.0), 1)


def history_summary(results: list[DrawResult], earnings: list[TicketEarning]) -> dict[str, int]:
    return {
        'total_wins': sum(1 for result in results if result.won),
        'total_tickets_earned': sum(earning.tickets_earned for earning in earnings),
    }
