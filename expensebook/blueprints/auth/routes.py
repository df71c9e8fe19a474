import logging
from urllib.parse import urlsplit
from flask import Blueprint, render_template, request, redirect, url_for, flash
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from ...extensions import db
from ...models import User

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")
logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _safe_next(target):
    """Only follow relative redirects back into this site."""
    if not target:
        return None
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith("/"):
        return None
    return target


def validate_registration(email, password, confirm_password):
    if not all([email, password, confirm_password]):
        return "All fields are required"
    if password != confirm_password:
        return "Passwords do not match"
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


@auth_bp.route("/register", methods=["GET", "POST"])
def register():
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.index"))
    if request.method == "POST":
        email = (request.form.get("email") or "").strip().lower()
        password = request.form.get("password") or ""
        confirm_password = request.form.get("confirm_password") or ""
        error = validate_registration(email, password, confirm_password)
        if not error and User.query.filter_by(email=email).first():
            error = "Email already registered"
        if error:
            flash(error, "danger")
            return render_template("auth/register.html", email=email)
        user = User(email=email)
        user.set_password(password)
        db.session.add(user)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Could not register %s", email)
            flash("Registration failed, please try again", "danger")
            return render_template("auth/register.html", email=email)
        logger.info("Registered user %s", user.id)
        login_user(user)
        flash("Welcome! Your account is ready.", "success")
        return redirect(url_for("dashboard.index"))
    return render_template("auth/register.html")


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.index"))
    if request.method == "POST":
        email = (request.form.get("email") or "").strip().lower()
        password = request.form.get("password") or ""
        user = User.query.filter_by(email=email).first()
        if user and user.check_password(password):
            login_user(user, remember=bool(request.form.get("remember")))
            flash("Logged in successfully", "success")
            return redirect(_safe_next(request.args.get("next")) or url_for("dashboard.index"))
        flash("Invalid credentials", "danger")
        return render_template("auth/login.html", email=email)
    return render_template("auth/login.html")


@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    flash("Logged out", "info")
    return redirect(url_for("auth.login"))
