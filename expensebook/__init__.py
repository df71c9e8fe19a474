from flask import Flask, redirect, url_for
from .extensions import db, migrate, login_manager
from .config import Config
from .events import ChangeFeed
from .logging_setup import configure_logging

from .blueprints.auth.routes import auth_bp
from .blueprints.dashboard.routes import dashboard_bp
from .blueprints.expenses.routes import expenses_bp
from .blueprints.stats.routes import stats_bp
from .blueprints.api.routes import api_bp


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    ChangeFeed().init_app(app)

    # Ensure tables exist for a smooth first run
    with app.app_context():
        db.create_all()

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(stats_bp)
    app.register_blueprint(api_bp)

    from .cli import register_commands
    register_commands(app)

    @app.template_filter("money")
    def money(value):
        return f"{app.config['CURRENCY_SYMBOL']}{float(value or 0):.2f}"

    @app.context_processor
    def inject_choices():
        return {
            "time_periods": app.config["TIME_PERIODS"],
            "payment_methods": app.config["PAYMENT_METHODS"],
            "stats_periods": app.config["STATS_PERIODS"],
        }

    @app.route("/")
    def root():
        return redirect(url_for("dashboard.index"))

    app.logger.info("expensebook ready")
    return app
