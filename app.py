"""
Anand Hotels - Hotel Booking & Management
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, render_template, request, g, send_from_directory
from flask_login import current_user
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db

from utils.api_response import api_error
from utils.auth_session import AuthSession
from utils.datetime_helpers import get_now
from utils.decorators import wants_json
from utils.messages import get_message

JSON_PATH_PREFIXES = ('/api/', '/admin/')


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    config_class = config[config_name]
    if config_name == 'production':
        config_class.validate()
    app.config.from_object(config_class)

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Resolve the auth session for every request
    register_request_hooks(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register context processors
    register_context_processors(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.auth.routes import auth_bp
    from blueprints.public import public_bp
    from blueprints.admin import admin_bp
    from blueprints.api.routes import api_bp

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(public_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/uploads/<path:filename>')
    def uploaded_file(filename):
        """Serve images stored by the local image backend."""
        return send_from_directory(os.path.abspath(app.config['UPLOAD_FOLDER']), filename)


def register_request_hooks(app):
    """Register before-request handlers."""

    @app.before_request
    def resolve_auth_session():
        """Build the explicit auth session the admin gate evaluates."""
        g.auth = AuthSession.from_user(current_user)


def _json_error_expected() -> bool:
    return wants_json() or request.path.startswith(JSON_PATH_PREFIXES)


def register_error_handlers(app):
    """Register error handlers."""

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        if _json_error_expected():
            return api_error(get_message('not_found', entity='Resource'), 404)
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        if _json_error_expected():
            return api_error('Internal server error', 500)
        return render_template('errors/500.html'), 500

    @app.errorhandler(403)
    def forbidden_error(error):
        """Handle 403 errors."""
        if _json_error_expected():
            return api_error(get_message('admin_required'), 403)
        return render_template('errors/403.html'), 403


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('create-admin')
    @click.argument('email')
    @click.option('--name', default=None, help='Display name')
    @click.password_option()
    def create_admin_command(email, name, password):
        """Create an admin account."""
        from models.user import create_user

        with app.app_context():
            try:
                user_id = create_user(
                    email=email,
                    password=password,
                    display_name=name,
                    role='admin'
                )
                click.echo(f'Admin created successfully! ID: {user_id}')
            except ValueError as e:
                click.echo(f'Error creating admin: {str(e)}', err=True)


def register_context_processors(app):
    """Register template context processors."""

    @app.context_processor
    def utility_processor():
        """Inject shared values into templates."""
        return {
            'current_year': get_now().year,
            'app_name': app.config.get('APP_NAME', 'Anand Hotels'),
            'app_version': app.config.get('APP_VERSION', '1.0.0'),
            'currency': app.config.get('CURRENCY', 'INR')
        }

    # Add custom template filters
    @app.template_filter('format_date')
    def format_date_filter(date_str, format='%d %b %Y'):
        """Format date string."""
        from utils.datetime_helpers import parse_datetime
        if not date_str:
            return ''
        try:
            return parse_datetime(date_str).strftime(format)
        except ValueError:
            return date_str


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/anand_hotels.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Anand Hotels startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
