from datetime import datetime

from flask import current_app, render_template, redirect, url_for, flash
from flask_login import login_user, logout_user, login_required, current_user
from . import bp
from .forms import MagicLinkForm
from .tokens import make_token, read_token, login_stamp, InvalidLink
from ...extensions import db, rq
from ...jobs.notify import deliver_magic_link
from ...models.user import User


def _domain_allowed(email):
    allowed = current_app.config.get("ALLOWED_EMAIL_DOMAINS") or []
    if not allowed:
        return True
    return email.rsplit("@", 1)[-1].lower() in allowed


@bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("index"))
    form = MagicLinkForm()
    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        if not _domain_allowed(email):
            flash("This email address is not allowed to sign in.", "danger")
            return render_template("auth/login.html", form=form)
        link = url_for("auth.verify", token=make_token(email), _external=True)
        try:
            rq.enqueue(deliver_magic_link, email, link)
        except Exception as e:
            current_app.logger.exception('Error sending magic link to %s', email)
            flash(str(e) or "Failed to send magic link", "danger")
            return render_template("auth/login.html", form=form)
        flash("Magic link sent! Check your email.", "success")
        return redirect(url_for("auth.login"))
    return render_template("auth/login.html", form=form)


@bp.get("/verify/<token>")
def verify(token):
    try:
        email, seen = read_token(token)
    except InvalidLink as e:
        flash(str(e), "danger")
        return redirect(url_for("auth.login"))

    user = User.query.filter_by(email=email).first()
    # signing in moves last_login_at, which retires every earlier link
    if seen != login_stamp(user):
        flash("This sign-in link has already been used. Request a new one.", "danger")
        return redirect(url_for("auth.login"))
    if user is None:
        user = User(email=email)
        db.session.add(user)
        current_app.logger.info('user created email=%s', email)
    user.last_login_at = datetime.utcnow()
    db.session.commit()
    login_user(user)
    return redirect(url_for("index"))


@bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return redirect(url_for("auth.login"))
