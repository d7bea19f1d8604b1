"""
Admin blueprint initialization.
Assembles the back-office route modules into one blueprint mounted at /admin.

Every screen follows the same flow: fetch the whole collection, filter it in
Python by a free-text search plus enum filters, respond with JSON. Writes go
straight to the database; deletions need confirm=true.

Route modules (blueprints/admin/routes/):
- dashboard.py - Headline stats and recent activity
- rooms.py - Room CRUD
- gallery.py - Room images (upload, metadata, main image)
- inventory.py - Maintenance records and availability blocks
- bookings.py - Booking list, edits, status and payment
- guests.py - Guest profiles, stats, booking history
- promotions.py - Promotions and banners
- messages.py - Contact inbox
- analytics.py - Analytics report and export
- settings.py - Hotel/notification settings, admin profile
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from blueprints.admin.routes import (  # noqa: E402
    dashboard, rooms, gallery, inventory, bookings, guests,
    promotions, messages, analytics, settings
)

for module in (dashboard, rooms, gallery, inventory, bookings, guests,
               promotions, messages, analytics, settings):
    module.register_routes(admin_bp)
