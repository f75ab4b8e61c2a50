from flask import current_app, jsonify
from agency_cms.domain.errors import HomeContentError
from agency_cms.domain.invariants.exceptions import InvariantViolation

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(HomeContentError)
    def handle_home_content_error(error):
        current_app.logger.warning(
            f"{type(error).__name__}: {error}"
        )
        response = jsonify({
            "error": type(error).__name__,
            "message": str(error)
        })
        response.status_code = error.status_code
        return response
