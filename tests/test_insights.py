"""
Tests for insights aggregation functions.
"""

import random
from datetime import date, datetime

import pytest

from models.insights import (
    get_window_start,
    filter_by_window,
    group_by_month,
    calculate_revenue,
    calculate_growth,
    get_revenue_metrics,
    get_status_distribution,
    get_booking_metrics,
    calculate_occupancy_rate,
    get_room_metrics,
    split_new_and_returning,
    get_guest_metrics,
    calculate_average_stay,
    get_dashboard_stats,
    get_recent_activity,
    build_analytics_report,
    export_report_to_excel,
)


def _booking(booking_id, created_at, total=100, payment='pending', status='pending',
             user_id=1, room_id=1, check_in='2024-01-10', check_out='2024-01-12'):
    return {
        'id': booking_id,
        'user_id': user_id,
        'room_id': room_id,
        'created_at': created_at,
        'total_amount': total,
        'payment_status': payment,
        'booking_status': status,
        'check_in': check_in,
        'check_out': check_out,
    }


ROOMS = [
    {'id': 1, 'type': 'Deluxe Room'},
    {'id': 2, 'type': 'Ocean Suite'},
    {'id': 3, 'type': 'Family Suite'},
    {'id': 4, 'type': 'Deluxe Room'},
]


class TestRevenue:
    """Tests for revenue metrics."""

    def test_only_paid_bookings_count(self):
        bookings = [
            _booking(1, '2024-01-05T10:00:00', total=200, payment='paid'),
            _booking(2, '2024-01-06T10:00:00', total=300, payment='pending'),
        ]
        assert calculate_revenue(bookings) == 200

    def test_refunded_and_partial_excluded(self):
        bookings = [
            _booking(1, '2024-01-05T10:00:00', total=500, payment='refunded'),
            _booking(2, '2024-01-06T10:00:00', total=400, payment='partial'),
        ]
        assert calculate_revenue(bookings) == 0

    def test_metrics(self):
        bookings = [
            _booking(1, '2024-01-05T10:00:00', total=100, payment='paid'),
            _booking(2, '2024-02-06T10:00:00', total=150, payment='paid'),
            _booking(3, '2024-02-07T10:00:00', total=999, payment='pending'),
        ]
        metrics = get_revenue_metrics(bookings)

        assert metrics['total'] == 250
        assert metrics['monthly'] == [
            {'month': 'Jan 2024', 'amount': 100},
            {'month': 'Feb 2024', 'amount': 150},
        ]
        assert metrics['growth'] == 50.0
        assert metrics['paid_bookings'] == 2
        assert metrics['average_booking_value'] == 125

    def test_growth_without_previous_month(self):
        assert calculate_growth([{'month': 'Jan 2024', 'amount': 100}]) == 0
        assert calculate_growth([{'month': 'Jan 2024', 'amount': 0},
                                 {'month': 'Feb 2024', 'amount': 100}]) == 0


class TestMonthlyGrouping:
    """Tests for grouping by creation month."""

    def test_stable_under_reordering(self):
        bookings = [
            _booking(i, f'2024-{month:02d}-{day:02d}T09:00:00', total=10 * i, payment='paid')
            for i, (month, day) in enumerate([(1, 3), (3, 14), (2, 1), (1, 28), (3, 2)], start=1)
        ]
        expected = group_by_month(bookings, lambda b: b['total_amount'])

        shuffled = list(bookings)
        random.Random(7).shuffle(shuffled)
        assert group_by_month(shuffled, lambda b: b['total_amount']) == expected
        assert [item['month'] for item in expected] == ['Jan 2024', 'Feb 2024', 'Mar 2024']

    def test_year_boundary_is_chronological(self):
        records = [{'created_at': '2024-01-02'}, {'created_at': '2023-12-30'}]
        months = [item['month'] for item in group_by_month(records, lambda r: 1)]
        assert months == ['Dec 2023', 'Jan 2024']


class TestWindow:
    """Tests for time range windows."""

    def test_window_start(self):
        today = date(2024, 3, 15)
        assert get_window_start('1month', today) == date(2024, 2, 1)
        assert get_window_start('3months', today) == date(2023, 12, 1)
        assert get_window_start('6months', today) == date(2023, 9, 1)
        assert get_window_start('1year', today) == date(2023, 3, 1)

    def test_unknown_range_rejected(self):
        with pytest.raises(ValueError):
            get_window_start('2weeks', date(2024, 3, 15))

    def test_filter_by_window(self):
        records = [
            {'id': 1, 'created_at': '2024-01-31T23:59:00'},
            {'id': 2, 'created_at': '2024-02-01T00:00:00'},
            {'id': 3, 'created_at': '2024-03-20T00:00:00'},
            {'id': 4, 'created_at': None},
        ]
        window = filter_by_window(records, date(2024, 2, 1), datetime(2024, 3, 15))
        assert [r['id'] for r in window] == [2]


class TestBookingMetrics:
    """Tests for booking volume metrics."""

    def test_status_distribution_defaults_to_pending(self):
        bookings = [
            _booking(1, '2024-01-01', status='confirmed'),
            _booking(2, '2024-01-02', status='confirmed'),
            _booking(3, '2024-01-03', status=None),
        ]
        distribution = get_status_distribution(bookings)
        counts = {item['status']: item['count'] for item in distribution}
        assert counts == {'confirmed': 2, 'pending': 1}
        assert distribution[0]['status'] == 'confirmed'

    def test_monthly_counts(self):
        bookings = [_booking(1, '2024-01-01'), _booking(2, '2024-01-09'), _booking(3, '2024-02-01')]
        metrics = get_booking_metrics(bookings)
        assert metrics['total'] == 3
        assert metrics['monthly'] == [{'month': 'Jan 2024', 'count': 2},
                                      {'month': 'Feb 2024', 'count': 1}]


class TestRoomMetrics:
    """Tests for room performance metrics."""

    def test_occupancy_counts_distinct_checked_in_rooms(self):
        bookings = [
            _booking(1, '2024-01-01', status='checked-in', room_id=1),
            _booking(2, '2024-01-02', status='checked-in', room_id=1),
            _booking(3, '2024-01-03', status='checked-in', room_id=2),
            _booking(4, '2024-01-04', status='confirmed', room_id=3),
        ]
        assert calculate_occupancy_rate(bookings, ROOMS) == 50.0

    def test_occupancy_without_rooms(self):
        assert calculate_occupancy_rate([], []) == 0

    def test_popularity_and_revenue_by_type(self):
        bookings = [
            _booking(1, '2024-01-01', room_id=1, total=100, payment='paid'),
            _booking(2, '2024-01-02', room_id=4, total=200, payment='paid'),
            _booking(3, '2024-01-03', room_id=2, total=900, payment='pending'),
            _booking(4, '2024-01-04', room_id=99, total=50, payment='paid'),
        ]
        metrics = get_room_metrics(bookings, ROOMS)

        assert metrics['popular'][0] == {'room_type': 'Deluxe Room', 'bookings': 2}
        assert {'room_type': 'Unknown', 'bookings': 1} in metrics['popular']
        assert metrics['revenue'][0] == {'room_type': 'Deluxe Room', 'revenue': 300}
        assert all(item['room_type'] != 'Ocean Suite' for item in metrics['revenue'])


class TestGuestMetrics:
    """Tests for guest metrics."""

    def test_new_and_returning(self):
        bookings = [
            _booking(1, '2024-01-01', user_id=1),
            _booking(2, '2024-01-02', user_id=1),
            _booking(3, '2024-01-03', user_id=2),
            _booking(4, '2024-01-04', user_id=3),
        ]
        split = split_new_and_returning(bookings)
        assert split == {'new': 2, 'returning': 1}
        assert split['new'] + split['returning'] == len({b['user_id'] for b in bookings})

    def test_admins_excluded(self):
        users = [
            {'id': 1, 'role': 'admin', 'is_vip': False},
            {'id': 2, 'role': 'user', 'is_vip': True, 'loyalty_status': 'gold'},
            {'id': 3, 'role': 'user', 'is_vip': False, 'loyalty_status': None},
        ]
        metrics = get_guest_metrics([], users)

        assert metrics['total'] == 2
        assert metrics['vip'] == 1
        assert metrics['loyalty']['gold'] == 1
        assert metrics['loyalty']['bronze'] == 1


class TestDashboard:
    """Tests for dashboard stats and activity feed."""

    def test_stats(self):
        rooms = [{'id': i} for i in range(1, 6)]
        bookings = [
            _booking(1, '2024-01-01', total=300, status='confirmed',
                     check_in='2024-01-01', check_out='2024-01-04'),
            _booking(2, '2024-01-02', total=500, status='pending',
                     check_in='2024-01-01', check_out='2024-01-02'),
        ]
        stats = get_dashboard_stats(rooms, bookings, [{'id': 1}], window_days=30)

        assert stats['total_rooms'] == 5
        assert stats['total_bookings'] == 2
        assert stats['total_users'] == 1
        assert stats['total_revenue'] == 300
        assert stats['occupancy_rate'] == round(2 / (5 * 30) * 100)
        assert stats['average_stay'] == 2.0

    def test_occupancy_zero_without_bookings(self):
        stats = get_dashboard_stats([{'id': 1}], [], [], window_days=30)
        assert stats['occupancy_rate'] == 0
        assert calculate_average_stay([]) == 0

    def test_recent_activity_newest_first(self):
        bookings = [dict(_booking(1, '2024-01-03T10:00:00'), room_name='Family Suite',
                         user_name='Asha')]
        users = [
            {'id': 2, 'role': 'user', 'email': 'ravi@anandhotels.com', 'display_name': 'Ravi',
             'active': True, 'created_at': '2024-01-05T08:00:00'},
            {'id': 1, 'role': 'admin', 'email': 'admin@anandhotels.com',
             'created_at': '2024-01-06T08:00:00'},
        ]
        messages = [{'name': 'Meera', 'subject': None, 'status': 'unread',
                     'created_at': '2024-01-04T12:00:00'}]

        feed = get_recent_activity(bookings, users, messages, limit=2)

        assert [item['type'] for item in feed] == ['user', 'message']
        assert feed[1]['message'] == 'New message: No subject'


class TestReport:
    """Tests for the full analytics report."""

    def test_report_respects_window(self):
        bookings = [
            _booking(1, '2024-03-02T10:00:00', total=200, payment='paid'),
            _booking(2, '2023-01-02T10:00:00', total=900, payment='paid'),
        ]
        report = build_analytics_report(bookings, [], ROOMS, '1month', datetime(2024, 3, 15, 12, 0))

        assert report['time_range'] == '1month'
        assert report['period'] == {'start': '2024-02-01', 'end': '2024-03-15'}
        assert report['revenue']['total'] == 200
        assert report['bookings']['total'] == 1

    def test_excel_export(self):
        from io import BytesIO
        from openpyxl import load_workbook

        report = build_analytics_report([_booking(1, '2024-03-02', payment='paid')], [], ROOMS,
                                        '3months', datetime(2024, 3, 15))
        content = export_report_to_excel(report, 'Anand Hotels')

        workbook = load_workbook(BytesIO(content))
        assert workbook.sheetnames == ['Summary', 'Revenue', 'Bookings', 'Rooms', 'Guests']
