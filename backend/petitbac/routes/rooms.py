from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..game import views

bp = Blueprint("rooms", __name__)


@bp.get("/rooms/<code>")
def get_room(code: str):
    registry = current_app.extensions["petitbac"]["registry"]
    room = registry.get_room(code)
    if not room:
        return jsonify({"error": "room_not_found"}), 404
    return jsonify(views.public_room_view(room))
