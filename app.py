# app.py

import logging
from datetime import timedelta

import mongoengine
from flask import Flask
from flask.logging import default_handler
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from config import ProductionConfig
from services.reactions import PostCounterSink, ReactionCounter, ReactionStore, ReactionToggleService

jwt = JWTManager()
cors = CORS()


# create_app()
def create_app(config_object=ProductionConfig):
    app = Flask(__name__)

    app.config.from_object(config_object)

    # Logging, services log under their module names
    level = logging.DEBUG if app.config.get('DEBUG') else logging.INFO
    app.logger.setLevel(level)
    services_logger = logging.getLogger('services')
    services_logger.setLevel(level)
    services_logger.addHandler(default_handler)

    # MongoEngine
    mongoengine.connect(**app.config['MONGODB_SETTINGS'])

    # JWT Configuration
    app.config.setdefault('JWT_ACCESS_TOKEN_EXPIRES', timedelta(hours=1))
    jwt.init_app(app)

    # Enabling CORS
    cors.init_app(app, supports_credentials=True)

    # Reactions, built once and shared by every request
    store = ReactionStore()
    app.extensions['reactions'] = ReactionToggleService(store, ReactionCounter(store), PostCounterSink())

    # Blueprints
    from controllers.reaction import reaction_bp

    app.register_blueprint(reaction_bp)

    # Commands
    from commands import reconcile_counters

    app.cli.add_command(reconcile_counters)

    return app
