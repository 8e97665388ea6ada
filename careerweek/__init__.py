import logging

from flask import Flask, redirect, render_template, url_for
from .extensions import db, login_manager, migrate, rq


def _configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    app.logger.setLevel(level)


def create_app(config_object="config.Config"):
    """App factory: extensions, blueprints, dashboard root and error pages."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    _configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"
    login_manager.login_message = "Please sign in to continue."
    rq.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        return db.session.get(User, int(user_id))

    from .blueprints.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")

    from .blueprints.candidates import bp as candidates_bp
    app.register_blueprint(candidates_bp, url_prefix="/candidates")

    from .blueprints.interviews import bp as interviews_bp
    app.register_blueprint(interviews_bp, url_prefix="/interviews")

    @app.get('/')
    def index():
        from flask_login import current_user
        if not current_user.is_authenticated:
            return redirect(url_for('auth.login'))
        return redirect(url_for('candidates.board'))

    @app.errorhandler(404)
    def not_found(e):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def server_error(e):
        db.session.rollback()
        app.logger.error('Unhandled error: %s', e)
        return render_template('errors/500.html'), 500

    return app
