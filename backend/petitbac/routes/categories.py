from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

bp = Blueprint("categories", __name__)


@bp.get("/categories")
def get_categories():
    source = current_app.extensions["petitbac"]["categories"]
    default_count = current_app.config.get("RANDOM_THEMES_COUNT", 6)
    try:
        count = int(request.args.get("count", default_count))
    except ValueError:
        count = default_count

    return jsonify({"categories": source.sample(count), "defaults": source.default_list()})
