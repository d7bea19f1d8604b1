"""
Authentication routes: login, registration, logout, profile.
Handles user authentication and profile management.
"""

from flask import render_template, redirect, url_for, flash, request, Blueprint, current_app
from flask_login import login_user, logout_user, login_required, current_user
from urllib.parse import urlparse

from blueprints.auth.forms import LoginForm, RegisterForm, ProfileForm, ChangePasswordForm
from models.user import (
    User, get_user_by_email, get_user_by_id, create_user, update_last_login,
    update_user, update_password, check_password
)
from utils.messages import MESSAGES

auth_bp = Blueprint('auth', __name__, template_folder='../../templates/auth')


def _default_landing(user) -> str:
    """Admins land on the back office, guests on their dashboard."""
    if user.is_admin:
        return url_for('admin.dashboard')
    return url_for('public.dashboard')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """
    Login route with form handling.

    GET: Display login form
    POST: Process login credentials
    """
    if current_user.is_authenticated:
        return redirect(_default_landing(current_user))

    form = LoginForm()

    if form.validate_on_submit():
        user_dict = get_user_by_email(form.email.data)

        if user_dict is None or not check_password(user_dict, form.password.data):
            flash(MESSAGES['invalid_credentials'], 'error')
            return redirect(url_for('auth.login', next=request.args.get('next')))

        if not user_dict.get('active'):
            flash(MESSAGES['account_inactive'], 'error')
            return redirect(url_for('auth.login'))

        user = User(user_dict)
        login_user(user, remember=form.remember_me.data)
        update_last_login(user.id)

        current_app.logger.info(f'User {user.email} logged in')
        flash(MESSAGES['login_success'].format(name=user.display_name or user.email), 'success')

        # Only follow relative next URLs
        next_page = request.args.get('next')
        if not next_page or urlparse(next_page).netloc != '':
            next_page = _default_landing(user)

        return redirect(next_page)

    return render_template('login.html', form=form)


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """Guest self-registration (role 'user')."""
    if current_user.is_authenticated:
        return redirect(_default_landing(current_user))

    form = RegisterForm()

    if form.validate_on_submit():
        try:
            user_id = create_user(form.email.data, form.password.data,
                                  display_name=form.display_name.data.strip())
        except ValueError as e:
            flash(str(e), 'error')
            return render_template('register.html', form=form)

        user = User(get_user_by_id(user_id))
        login_user(user)
        update_last_login(user.id)

        current_app.logger.info(f'New guest registered: {user.email}')
        flash(MESSAGES['register_success'].format(name=user.display_name), 'success')
        return redirect(url_for('public.dashboard'))

    return render_template('register.html', form=form)


@auth_bp.route('/logout')
@login_required
def logout():
    """Logout current user."""
    logout_user()
    flash(MESSAGES['logout_success'], 'success')
    return redirect(url_for('auth.login'))


@auth_bp.route('/profile')
@login_required
def profile():
    """Display user profile."""
    user_dict = get_user_by_id(current_user.id)

    return render_template('profile.html', user=user_dict)


@auth_bp.route('/profile/edit', methods=['GET', 'POST'])
@login_required
def profile_edit():
    """Edit user profile."""
    form = ProfileForm()

    if form.validate_on_submit():
        updated = update_user(
            current_user.id,
            display_name=form.display_name.data,
            phone=form.phone.data,
            photo_url=form.photo_url.data or None
        )

        if updated:
            flash(MESSAGES['profile_updated'], 'success')
            return redirect(url_for('auth.profile'))
        else:
            flash(MESSAGES['save_failed'].format(entity='profile'), 'error')

    # Pre-populate form
    user_dict = get_user_by_id(current_user.id)
    if request.method == 'GET':
        form.display_name.data = user_dict.get('display_name')
        form.phone.data = user_dict.get('phone')
        form.photo_url.data = user_dict.get('photo_url')

    return render_template('profile_edit.html', form=form, user=user_dict)


@auth_bp.route('/profile/change-password', methods=['GET', 'POST'])
@login_required
def change_password():
    """Change user password after re-checking the current one."""
    form = ChangePasswordForm()

    if form.validate_on_submit():
        user_dict = get_user_by_id(current_user.id)
        if not check_password(user_dict, form.current_password.data):
            flash(MESSAGES['current_password_wrong'], 'error')
            return render_template('change_password.html', form=form)

        updated = update_password(current_user.id, form.new_password.data)

        if updated:
            flash(MESSAGES['password_updated'], 'success')
            return redirect(url_for('auth.profile'))
        else:
            flash(MESSAGES['save_failed'].format(entity='password'), 'error')

    return render_template('change_password.html', form=form)
