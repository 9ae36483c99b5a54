from src.integrations.promorang.dashboard.models import RecentWinner
from src.services.promoshare import build_dashboard_view, build_widget_view


def test_dashboard_view_orders_and_totals(make_draw, now):
    draws = [
        make_draw(1, 'daily', hours=12, jackpot_amount=50, user_tickets=3, total_tickets=89),
        make_draw(2, 'weekly', hours=96, jackpot_amount=500, user_tickets=12, total_tickets=450),
        make_draw(3, 'monthly', hours=18 * 24, jackpot_amount=2500, user_tickets=45, total_tickets=2100),
        make_draw(4, 'grand', hours=96, jackpot_amount=10000, is_rollover=True, user_tickets=12, total_tickets=450),
    ]
    winners = [RecentWinner(username='sarah_style', prize='$25 Coupon', date='2 days ago')]

    view = build_dashboard_view(draws, winners, now)

    assert [draw.id for draw in view.draws] == [4, 1, 2, 3]
    assert view.active_draws == 4
    assert view.total_user_tickets == 72
    assert view.combined_jackpot == 13050
    assert view.recent_winners == winners

    grand, daily, weekly, monthly = view.draws
    assert grand.label == 'GRAND JACKPOT'
    assert grand.is_rollover is True
    assert grand.time_left == '4d 0h'
    assert daily.label == 'Daily Draw'
    assert daily.time_left == '12h 0m'
    assert daily.win_probability == 3.4
    assert monthly.win_probability == 2.1
    assert not weekly.is_settling


def test_dashboard_view_marks_settling_draws(make_draw, now):
    view = build_dashboard_view([make_draw(1, hours=-1)], [], now)

    assert view.draws[0].is_settling
    assert view.draws[0].time_left == '0m'


def test_empty_dashboard_view(now):
    view = build_dashboard_view([], [], now)

    assert view.draws == []
    assert view.active_draws == 0
    assert view.total_user_tickets == 0
    assert view.combined_jackpot == 0


def test_dashboard_view_serializes(make_draw, now):
    data = build_dashboard_view([make_draw()], [], now).model_dump(mode='json')

    assert data['draws'][0]['cycle_type'] == 'daily'
    assert data['draws'][0]['end_at'].startswith('2026-01-11T00:00:00')


def test_widget_view_uses_soonest_draw(make_draw, now):
    draws = [
        make_draw(1, 'grand', hours=120, jackpot_amount=1000, user_tickets=40),
        make_draw(2, 'daily', hours=3.5, jackpot_amount=250, user_tickets=7),
    ]

    view = build_widget_view(draws, now)

    assert view.user_tickets == 47
    assert view.jackpot == 1250
    assert view.time_left == '3h 30m'


def test_widget_view_without_draws(now):
    view = build_widget_view([], now)

    assert view.user_tickets == 0
    assert view.jackpot == 0
    assert view.time_left is None
