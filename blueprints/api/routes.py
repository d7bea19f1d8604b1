"""
API routes for JSON endpoints that need no authentication.
"""

from flask import jsonify, Blueprint, current_app

from database import get_db

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status, database reachability and version
    """
    database_ok = True
    try:
        get_db().execute('SELECT 1').fetchone()
    except Exception as e:
        current_app.logger.error(f'Health check database error: {e}', exc_info=True)
        database_ok = False

    return jsonify({
        'status': 'ok' if database_ok else 'degraded',
        'database': 'ok' if database_ok else 'unavailable',
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'Anand Hotels')
    }), 200 if database_ok else 503
