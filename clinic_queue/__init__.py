import os
from flask import Flask, jsonify
from clinic_queue.extensions import db, migrate, limiter, cors
from clinic_queue.utils.error_handlers import register_error_handlers
from clinic_queue.commands import register_commands
from config import config


def create_app(config_name=None):
    config_name = config_name or os.getenv('FLASK_CONFIG') or 'default'
    config_class = config[config_name]

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    cors.init_app(
        app,
        origins=app.config['ALLOWED_ORIGINS'],
        allow_headers=['Content-Type', 'Authorization', 'X-Requested-With'],
        methods=['GET', 'POST', 'PUT', 'OPTIONS']
    )

    # Initialize app with config (logging, audit logger)
    config_class.init_app(app)

    # Register blueprints
    from clinic_queue.api import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    # Register error handlers and commands
    register_error_handlers(app)
    register_commands(app)

    @app.route('/health', methods=['GET'])
    @limiter.exempt
    def health_check():
        return jsonify({'success': True, 'data': {'status': 'ok'}}), 200

    return app
