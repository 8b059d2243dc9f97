from functools import wraps
from flask import abort
from flask_login import current_user


def hr_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            abort(401)
        if getattr(current_user, "role", None) != "hr":
            abort(403)
        return view(*args, **kwargs)
    return wrapped


def ensure_can_access(application):
    """403 unless the current user owns the application or works in HR."""
    if current_user.is_hr or application.user_id == current_user.id:
        return application
    abort(403)
