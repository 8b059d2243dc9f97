from flask import abort, current_app, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from . import bp
from .forms import LoginForm, SignupForm
from ...errors import PersistenceError, ValidationError
from ...extensions import db
from ...models.user import User
from ...utils.forms import validate_or_raise


@bp.post("/signup")
def signup():
    """Candidates sign up freely. HR accounts: the first one is open, later
    ones must be created by a logged-in HR user."""
    form = validate_or_raise(SignupForm())
    if form.role.data == "hr":
        hr_exists = User.query.filter_by(role="hr").first() is not None
        if hr_exists and not (current_user.is_authenticated and current_user.is_hr):
            abort(403)

    if User.query.filter_by(email=form.email.data).first():
        raise ValidationError("A user with this email already exists")

    user = User(
        email=form.email.data,
        name=form.name.data or None,
        role=form.role.data,
        company=form.company.data or None,
        skills=form.skills.data or None,
        experience_years=form.experience_years.data,
    )
    user.set_password(form.password.data)
    db.session.add(user)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Creating user %s failed", form.email.data)
        raise PersistenceError("Failed to create account") from e
    current_app.logger.info("User %s signed up as %s", user.id, user.role)
    return jsonify(user.to_dict()), 201


@bp.post("/login")
def login():
    form = validate_or_raise(LoginForm())
    user = User.query.filter_by(email=form.email.data).first()
    if user and user.check_password(form.password.data):
        login_user(user)
        return jsonify(user.to_dict())
    current_app.logger.warning("Failed login for %s", form.email.data)
    return jsonify({"error": "Invalid credentials"}), 401


@bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"ok": True})


@bp.get("/me")
@login_required
def me():
    return jsonify(current_user.to_dict())
