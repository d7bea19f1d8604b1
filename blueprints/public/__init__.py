"""
Public blueprint initialization.
Assembles the guest-facing site: pages, room catalog, booking, guest
dashboard, contact form and offers.

Route modules (blueprints/public/routes/):
- pages.py - Home and about pages
- rooms.py - Room catalog, room detail, booking quote
- bookings.py - Booking creation and the guest dashboard
- contact.py - Contact form submissions
- offers.py - Active offers, promo code check, add-on catalog
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__, template_folder='../../templates/public')

from blueprints.public.routes import pages, rooms, bookings, contact, offers  # noqa: E402

for module in (pages, rooms, bookings, contact, offers):
    module.register_routes(public_bp)
