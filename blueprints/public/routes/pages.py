"""
Static-ish public pages.
"""

from flask import render_template

from models.promotion import get_all_promotions, get_active_offers
from models.room import get_all_rooms
from utils.datetime_helpers import get_today

FEATURED_ROOMS = 3


def register_routes(bp):
    """Register page routes on the public blueprint."""

    @bp.route('/')
    def home():
        """Landing page with featured rooms and current offers."""
        rooms = [r for r in get_all_rooms() if r['availability']]
        offers = get_active_offers(get_all_promotions(), get_today())
        return render_template('home.html', rooms=rooms[:FEATURED_ROOMS], offers=offers)

    @bp.route('/about')
    def about():
        return render_template('about.html')
