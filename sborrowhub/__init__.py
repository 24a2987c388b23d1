from flask import Flask, jsonify

from sborrowhub.config import Config
from sborrowhub.errors import register_error_handlers
from sborrowhub.extensions import db, migrate, jwt, mail
from sborrowhub.utils.clock import utcnow


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config["STARTED_AT"] = utcnow()

    # 1) Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # 2) Models must be imported before create_all / migrations see them
    from sborrowhub.models import (  # noqa: F401
        activity_log, borrow_request, cart_item, contact_message, item,
        notification, review, transaction, user, user_settings,
    )

    # 3) Blueprints
    from sborrowhub.controllers.auth_controller import auth_bp
    from sborrowhub.controllers.catalog_controller import catalog_bp
    from sborrowhub.controllers.borrow_controller import borrow_bp
    from sborrowhub.controllers.officer_controller import officer_bp
    from sborrowhub.controllers.admin_controller import admin_bp
    from sborrowhub.controllers.backup_controller import backup_bp
    from sborrowhub.controllers.notification_controller import notif_bp
    from sborrowhub.controllers.review_controller import review_bp
    from sborrowhub.controllers.contact_controller import contact_bp
    from sborrowhub.controllers.cart_controller import cart_bp
    from sborrowhub.controllers.settings_controller import settings_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(catalog_bp, url_prefix="/catalog")
    app.register_blueprint(borrow_bp, url_prefix="/borrow")
    app.register_blueprint(officer_bp, url_prefix="/officer")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(backup_bp, url_prefix="/backup")
    app.register_blueprint(notif_bp, url_prefix="/notifications")
    app.register_blueprint(review_bp, url_prefix="/reviews")
    app.register_blueprint(contact_bp, url_prefix="/contact")
    app.register_blueprint(cart_bp, url_prefix="/cart")
    app.register_blueprint(settings_bp, url_prefix="/settings")

    register_error_handlers(app)

    from sborrowhub.cli import register_cli
    register_cli(app)

    # 4) Activity log for every mutating request
    from sborrowhub.services.activity_service import ActivityService
    app.after_request(ActivityService.record_request)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    # 5) Overdue sweep
    from sborrowhub.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
