from flask import jsonify, render_template, request

API_PREFIX = "/api/"


def _wants_json():
    return request.path.startswith(API_PREFIX)


def _json_error(message, status):
    return jsonify({"success": False, "error": message}), status


def register_error_handlers(app):
    @app.errorhandler(400)
    def bad_request(e):
        if _wants_json():
            return _json_error("Bad request", 400)
        return render_template("errors/400.html"), 400

    @app.errorhandler(404)
    def not_found(e):
        if _wants_json():
            return _json_error("Not found", 404)
        return render_template("errors/404.html"), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        if _wants_json():
            return _json_error("Method not allowed", 405)
        return e

    @app.errorhandler(429)
    def too_many_requests(e):
        app.logger.warning("429 Too Many Requests: %s", request.path)
        if _wants_json():
            return _json_error("Too many requests", 429)
        return e

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.exception("Internal server error: %s", e)
        if _wants_json():
            return _json_error("Internal server error", 500)
        return render_template("errors/500.html"), 500
