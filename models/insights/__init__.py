"""
Insights analytics module.
Pure aggregation over fetched bookings, users and rooms.

Submodules:
    - window: Time ranges and monthly grouping
    - revenue: Paid revenue, monthly series and growth
    - bookings: Booking volume and status distribution
    - rooms: Occupancy, popularity and revenue by room type
    - guests: New vs returning guests, VIPs and loyalty tiers
    - dashboard: Admin dashboard stats and recent activity
    - report: Full report and Excel export
"""

from models.insights.window import (
    TIME_RANGES,
    DEFAULT_TIME_RANGE,
    get_window_start,
    filter_by_window,
    group_by_month,
)

from models.insights.revenue import (
    calculate_revenue,
    calculate_growth,
    get_revenue_metrics,
)

from models.insights.bookings import (
    get_status_distribution,
    get_booking_metrics,
)

from models.insights.rooms import (
    calculate_occupancy_rate,
    get_room_metrics,
)

from models.insights.guests import (
    split_new_and_returning,
    get_loyalty_distribution,
    get_guest_metrics,
)

from models.insights.dashboard import (
    calculate_average_stay,
    get_dashboard_stats,
    get_recent_activity,
)

from models.insights.report import (
    build_analytics_report,
    export_report_to_excel,
)

__all__ = [
    # Window
    'TIME_RANGES',
    'DEFAULT_TIME_RANGE',
    'get_window_start',
    'filter_by_window',
    'group_by_month',
    # Revenue
    'calculate_revenue',
    'calculate_growth',
    'get_revenue_metrics',
    # Bookings
    'get_status_distribution',
    'get_booking_metrics',
    # Rooms
    'calculate_occupancy_rate',
    'get_room_metrics',
    # Guests
    'split_new_and_returning',
    'get_loyalty_distribution',
    'get_guest_metrics',
    # Dashboard
    'calculate_average_stay',
    'get_dashboard_stats',
    'get_recent_activity',
    # Report
    'build_analytics_report',
    'export_report_to_excel',
]
