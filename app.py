"""
Recognition Service - Main Application
Employee enrollment and identification over AWS Rekognition and the
employee directory.
"""

import atexit
import logging
from flask import Flask, jsonify
from flask_cors import CORS
from config import Config
from services.recognition_service import init_recognition_service, shutdown_recognition_service

logger = logging.getLogger(__name__)


def configure_logging(config):
    """Configure root logging once: stream handler, plus file handler if LOG_FILE is set."""
    handlers = [logging.StreamHandler()]
    if getattr(config, 'LOG_FILE', None):
        handlers.insert(0, logging.FileHandler(config.LOG_FILE))

    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def create_app(config_object=Config, recognition_service=None):
    """
    Build the Flask app.

    Args:
        config_object: configuration class (Config or a test override)
        recognition_service: prebuilt RecognitionService; when omitted the
            process-wide one is initialized from config
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.url_map.strict_slashes = False  # Allow both /api/employees and /api/employees/
    config_object.init_app(app)
    configure_logging(config_object)

    CORS(app, resources={r"/*": {"origins": "*"}})

    # Make the recognition service available to blueprints
    if recognition_service is None:
        recognition_service = init_recognition_service(config_object)
    app.recognition_service = recognition_service

    from api.employees import employees_bp
    app.register_blueprint(employees_bp, url_prefix='/api/employees')

    @app.route('/api')
    def api_info():
        return jsonify({
            "message": "Recognition Service API",
            "version": "1.0.0",
            "status": "online"
        })

    @app.route('/health')
    def health():
        return jsonify({
            "status": "healthy",
            "recognition": app.recognition_service.get_stats(),
        })

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal error: {error}")
        return jsonify({"error": "Internal server error"}), 500

    return app


if __name__ == '__main__':
    app = create_app()
    atexit.register(shutdown_recognition_service)

    logger.info("Starting Recognition Service...")
    logger.info(f"Server running on {Config.HOST}:{Config.PORT}")

    app.run(
        host=Config.HOST,
        port=Config.PORT,
        debug=(Config.FLASK_ENV == 'development'),
    )
