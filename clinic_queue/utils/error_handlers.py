# /clinic_queue/utils/error_handlers.py
from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from clinic_queue.extensions import db
from clinic_queue.services.errors import QueueError

def register_error_handlers(app):
    @app.errorhandler(QueueError)
    def queue_error(error):
        if error.status_code >= 500:
            db.session.rollback()
            current_app.logger.error(f"Queue operation failed: {error.message}")
        return jsonify({'success': False, 'error': error.message}), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        current_app.logger.error(f"Database error: {str(error)}")
        current_app.audit_logger.error(f"Database error: {str(error)}")
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({'success': False, 'error': 'Bad request'}), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'success': False, 'error': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'error': 'Method not allowed'}), 405

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({'success': False, 'error': 'Too many requests'}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        current_app.audit_logger.error(f"Internal server error: {str(error)}")
        return jsonify({'success': False, 'error': 'Internal server error'}), 500
