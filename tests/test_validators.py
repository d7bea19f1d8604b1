"""
Tests for input validation utilities.
"""

import pytest
from utils.validators import (
    validate_email,
    validate_phone,
    validate_password,
    sanitize_input
)


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        """Test valid email formats."""
        assert validate_email('guest@anandhotels.com') is True
        assert validate_email('first.last@example.com') is True
        assert validate_email('user+tag@example.co.in') is True

    def test_invalid_email(self):
        """Test invalid email formats."""
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('invalid') is False
        assert validate_email('missing@domain') is False
        assert validate_email('@nodomain.com') is False
        assert validate_email('spaces in@email.com') is False


class TestValidatePhone:
    """Tests for phone validation."""

    def test_valid_phones(self):
        """Test international and local formats."""
        assert validate_phone('+919876543210') is True
        assert validate_phone('9876543210') is True
        assert validate_phone('+91 98765 43210') is True
        assert validate_phone('(022) 2345-6789') is True

    def test_invalid_phones(self):
        """Test invalid phone formats."""
        assert validate_phone('') is False
        assert validate_phone(None) is False
        assert validate_phone('12345') is False  # Too short
        assert validate_phone('abc1234567') is False  # Contains letters


class TestValidatePassword:
    """Tests for password validation."""

    def test_valid_password(self):
        is_valid, msg = validate_password('password123')
        assert is_valid is True
        assert msg == ''

    def test_password_too_short(self):
        is_valid, msg = validate_password('12345')
        assert is_valid is False
        assert 'at least 6 characters' in msg

    def test_password_empty(self):
        is_valid, msg = validate_password('')
        assert is_valid is False
        assert 'required' in msg

    def test_custom_min_length(self):
        is_valid, _ = validate_password('1234567', min_length=8)
        assert is_valid is False


class TestSanitizeInput:
    """Tests for input sanitization."""

    def test_trim_whitespace(self):
        assert sanitize_input('  hello  ') == 'hello'
        assert sanitize_input('\n\ttext\n') == 'text'

    def test_limit_length(self):
        assert sanitize_input('hello world', max_length=5) == 'hello'

    def test_empty_input(self):
        assert sanitize_input('') == ''
        assert sanitize_input(None) == ''
