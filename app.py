import logging
from flask import Flask
from flask_wtf import CSRFProtect
from config import Config
from extensions import db, login_manager, migrate, cache
from utils.filters import register_filters

csrf = CSRFProtect()


def create_app(config_class=Config):
    # Create and configure the app
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s - %(message)s',
    )

    # Initialize extensions
    csrf.init_app(app)
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    cache.init_app(app)

    # Register custom template filters
    register_filters(app)

    # Import model here to avoid circular imports
    from models.intern import Intern

    # Configure login manager
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Intern, int(user_id))

    @app.context_processor
    def inject_program():
        return {'program_months': app.config['PROGRAM_TOTAL_MONTHS']}

    # Register blueprints
    from routes.auth import auth_bp
    from routes.dashboard import dashboard_bp
    from routes.activity import activity_bp
    from routes.admin import admin_bp

    app.register_blueprint(auth_bp, url_prefix='/')
    app.register_blueprint(dashboard_bp, url_prefix='/')
    app.register_blueprint(activity_bp, url_prefix='/activities')
    app.register_blueprint(admin_bp, url_prefix='/admin')

    # Create database tables
    with app.app_context():
        db.create_all()

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
