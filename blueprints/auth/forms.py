"""
Authentication forms using Flask-WTF.
Provides login, registration and profile editing forms with CSRF protection.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length, EqualTo, Optional, URL


class LoginForm(FlaskForm):
    """Login form with email and password."""

    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email format')
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])

    remember_me = BooleanField('Remember me')


class RegisterForm(FlaskForm):
    """Guest registration form."""

    display_name = StringField('Full Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=200)
    ])

    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email format')
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=6, message='Password must be at least 6 characters')
    ])

    confirm_password = PasswordField('Confirm Password', validators=[
        DataRequired(message='Please confirm your password'),
        EqualTo('password', message='Passwords do not match')
    ])


class ProfileForm(FlaskForm):
    """Profile editing form."""

    display_name = StringField('Full Name', validators=[
        Optional(),
        Length(max=200)
    ])

    phone = StringField('Phone', validators=[
        Optional(),
        Length(max=30)
    ])

    photo_url = StringField('Photo URL', validators=[
        Optional(),
        URL(message='Invalid URL')
    ])


class ChangePasswordForm(FlaskForm):
    """Password change form (current password re-authenticates the user)."""

    current_password = PasswordField('Current Password', validators=[
        DataRequired(message='Current password is required')
    ])

    new_password = PasswordField('New Password', validators=[
        DataRequired(message='New password is required'),
        Length(min=6, message='Password must be at least 6 characters')
    ])

    confirm_password = PasswordField('Confirm Password', validators=[
        DataRequired(message='Please confirm the new password'),
        EqualTo('new_password', message='Passwords do not match')
    ])
