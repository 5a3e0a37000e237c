from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv
import logging

load_dotenv()

db = SQLAlchemy()
migrate = Migrate()
csrf = CSRFProtect()

def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object('config')
    if test_config:
        app.config.update(test_config)

    # Validate required configuration
    if not app.config.get('SECRET_KEY'):
        raise ValueError("Required environment variable SECRET_KEY is not set")

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    # Register blueprints
    from app.routes.main import main_bp
    from app.projects.calculators.routes import calculators_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(calculators_bp, url_prefix='/calculators')

    # Import models to ensure they're known to Flask-SQLAlchemy
    from app.models import LogEntry

    register_context_processors(app)

    return app


def register_context_processors(app):
    from app.projects.registry import get_all_categories

    @app.context_processor
    def inject_categories():
        return {'header_categories': get_all_categories()}
