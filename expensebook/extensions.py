from flask import flash, jsonify, redirect, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager, login_url

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
login_manager.login_view = "auth.login"
login_manager.login_message = "Please log in to continue"
login_manager.login_message_category = "info"


@login_manager.unauthorized_handler
def unauthorized():
    # JSON clients get a status code, pages get the login redirect
    if request.blueprint == "api":
        return jsonify({"error": "Authentication required"}), 401
    flash(login_manager.login_message, login_manager.login_message_category)
    return redirect(login_url(login_manager.login_view, next_url=request.url))
