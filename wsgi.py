"""WSGI entry point for production deployment (gunicorn -c gunicorn.conf.py wsgi:application)."""
import os
from app import create_app

application = create_app(os.environ.get('FLASK_ENV', 'production'))
