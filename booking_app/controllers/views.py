from datetime import datetime, timezone

from flask import Blueprint, jsonify

bp = Blueprint("views", __name__)


@bp.get("/api")
def health():
    return jsonify({
        "status": "OK",
        "message": "Vehicle Booking API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
    })
