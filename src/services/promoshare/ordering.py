from src.services.promoshare.models import CycleType, Draw


def _sort_key(draw: Draw):
    if draw.cycle_type is CycleType.GRAND:
        return 0, 0.0
    return 1, draw.end_at.timestamp()


def sort_draws(draws: list[Draw]) -> list[Draw]:
    """
    Display order: grand draws first, then soonest-ending first.

    The sort is stable, so grand draws and draws ending at the same moment
    keep their input order.
    """
    return sorted(draws, key=_sort_key)
