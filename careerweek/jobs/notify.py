from flask import current_app

from ..services.mail import send_magic_link


def deliver_magic_link(to_email: str, link: str):
    """RQ job: mail a sign-in link. Runs inline when Redis is unavailable."""
    status, headers = send_magic_link(to_email, link)
    current_app.logger.info('magic link sent to=%s status=%s', to_email, status)
    return status
