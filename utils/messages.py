"""
Centralized UI messages.
All user-facing text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome back, {name}',
    'logout_success': 'You have been logged out',
    'register_success': 'Account created. Welcome, {name}',
    'profile_updated': 'Profile updated successfully',
    'password_updated': 'Password updated successfully',
    'booking_created': 'Booking created successfully',
    'message_sent': 'Thank you! Your message has been sent',
    'created': '{entity} created successfully',
    'updated': '{entity} updated successfully',
    'deleted': '{entity} deleted successfully',

    # Error messages
    'invalid_credentials': 'Invalid email or password',
    'account_inactive': 'This account has been deactivated',
    'login_required_admin': 'Please log in to access admin panel',
    'admin_required': 'Access denied. Admin privileges required.',
    'login_required': 'Please log in to continue',
    'current_password_wrong': 'Current password is incorrect',
    'password_mismatch': 'Passwords do not match',
    'data_required': 'Request data is required',
    'confirmation_required': 'Deletion requires confirmation (confirm=true)',
    'not_found': '{entity} not found',
    'fetch_failed': 'Failed to fetch {entity}',
    'save_failed': 'Failed to save {entity}',
    'delete_failed': 'Failed to delete {entity}',
    'no_files': 'No files were uploaded',
    'upload_failed': 'Failed to upload images',
    'invalid_time_range': 'Invalid time range',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get UI message by key with optional formatting.

    Args:
        key: Message key
        **kwargs: Format arguments

    Returns:
        Formatted message string, or the key itself if unknown
    """
    message = MESSAGES.get(key, key)

    if kwargs:
        try:
            return message.format(**kwargs)
        except KeyError:
            return message

    return message
