from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from flask import current_app

from ...models.user import User

SALT = "careerweek-magic-link"


class InvalidLink(Exception):
    pass


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=SALT)


def login_stamp(user):
    """Marker of the user's last sign-in; a link is only good while it is unchanged."""
    if user is None or user.last_login_at is None:
        return ""
    return user.last_login_at.isoformat()


def make_token(email):
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    return _serializer().dumps({"email": email, "seen": login_stamp(user)})


def read_token(token, max_age=None):
    """Return ``(email, seen)`` from a sign-in token."""
    if max_age is None:
        max_age = current_app.config["MAGIC_LINK_MAX_AGE"]
    try:
        data = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        raise InvalidLink("This sign-in link has expired. Request a new one.")
    except BadSignature:
        raise InvalidLink("This sign-in link is invalid.")
    email = data.get("email") if isinstance(data, dict) else None
    if not email:
        raise InvalidLink("This sign-in link is invalid.")
    return email, data.get("seen")
