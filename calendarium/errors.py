from flask import jsonify, render_template, request

from .liturgical import InvalidInput


def _wants_json():
    return request.path.startswith("/api/")


def _error_response(status, message, template):
    if _wants_json():
        return jsonify({"error": message}), status
    return render_template(template, message=message), status


def register_error_handlers(app):
    @app.errorhandler(InvalidInput)
    def invalid_input(e):
        app.logger.info("Rejected request %s: %s", request.path, e)
        return _error_response(400, str(e), "errors/400.html")

    @app.errorhandler(400)
    def bad_request(e):
        return _error_response(400, e.description, "errors/400.html")

    @app.errorhandler(404)
    def not_found(e):
        return _error_response(404, "Not found", "errors/404.html")

    @app.errorhandler(429)
    def too_many_requests(e):
        app.logger.warning("429 Too Many Requests: %s", request.path)
        return _error_response(429, "Too many requests", "errors/429.html")

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.exception("Internal server error: %s", e)
        return _error_response(500, "Internal server error", "errors/500.html")
