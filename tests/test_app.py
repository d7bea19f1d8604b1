"""
Test application factory and configuration.
"""

import pytest
from app import create_app


class TestAppFactory:
    """Test Flask application factory."""

    def test_create_app_development(self):
        """Test app creation with development config."""
        app = create_app('development')
        assert app is not None
        assert app.config['DEBUG'] is True
        assert app.config['TESTING'] is False

    def test_create_app_test(self):
        """Test app creation with test config."""
        app = create_app('test')
        assert app.config['TESTING'] is True
        assert app.config['WTF_CSRF_ENABLED'] is False

    def test_app_has_blueprints(self):
        """Test that all blueprints are registered."""
        app = create_app('test')
        blueprint_names = list(app.blueprints.keys())

        assert 'auth' in blueprint_names
        assert 'public' in blueprint_names
        assert 'admin' in blueprint_names
        assert 'api' in blueprint_names

    def test_app_has_extensions(self):
        """Test that extensions are initialized."""
        app = create_app('test')
        assert hasattr(app, 'login_manager')

    def test_production_requires_secret_key(self, monkeypatch):
        """Production config refuses to start without a strong SECRET_KEY."""
        monkeypatch.delenv('SECRET_KEY', raising=False)
        with pytest.raises(ValueError, match='SECRET_KEY'):
            create_app('production')


class TestAppConfiguration:
    """Test application configuration."""

    def test_secret_key_set(self):
        app = create_app('test')
        assert app.config['SECRET_KEY']

    def test_app_name_set(self):
        app = create_app('test')
        assert app.config.get('APP_NAME') == 'Anand Hotels'

    def test_loyalty_tiers_ordered_by_threshold(self):
        """Tiers are listed from highest to lowest threshold, ending at 0."""
        app = create_app('test')
        thresholds = [threshold for _, threshold in app.config['LOYALTY_TIERS']]
        assert thresholds == sorted(thresholds, reverse=True)
        assert thresholds[-1] == 0


class TestCLICommands:
    """Test CLI command registration."""

    def test_cli_commands_registered(self):
        app = create_app('test')
        commands = list(app.cli.commands.keys())

        assert 'init-db' in commands
        assert 'create-admin' in commands

    def test_create_admin_command(self, app):
        """create-admin stores an account with the admin role."""
        from models.user import get_user_by_email

        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-admin', 'manager@anandhotels.com',
                                     '--name', 'Manager', '--password', 'secret123'])
        assert 'Admin created successfully' in result.output

        with app.app_context():
            user = get_user_by_email('manager@anandhotels.com')
            assert user['role'] == 'admin'
            assert user['display_name'] == 'Manager'
