from flask import abort, jsonify, request
from flask_login import login_required, current_user

from . import bp
from ...extensions import db
from ...models.notification import Notification


@bp.get("")
@login_required
def list_notifications():
    query = Notification.query.filter_by(user_id=current_user.id)
    if request.args.get("unread"):
        query = query.filter_by(is_read=False)
    items = query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(100).all()
    return jsonify([n.to_dict() for n in items])


@bp.post("/<int:notification_id>/read")
@login_required
def mark_read(notification_id):
    n = db.session.get(Notification, notification_id)
    if n is None or n.user_id != current_user.id:
        abort(404)
    n.is_read = True
    db.session.commit()
    return jsonify(n.to_dict())
