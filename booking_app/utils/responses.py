from flask import jsonify


def ok(data, message: str, status: int = 200):
    """Success envelope shared by every endpoint."""
    return jsonify({"success": True, "data": data, "message": message}), status


def fail(message: str, status: int, **extra):
    body = {"success": False, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    return jsonify(body), status
