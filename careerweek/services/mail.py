from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from flask import current_app

MAGIC_LINK_SUBJECT = "Your CareerWeek sign-in link"


def magic_link_html(link, max_age):
    minutes = max(1, int(max_age) // 60)
    return (
        "<p>Click the link below to sign in to CareerWeek.</p>"
        f'<p><a href="{link}">Sign in</a></p>'
        f"<p>The link expires in {minutes} minutes. If you did not ask for it, ignore this email.</p>"
    )


def send_magic_link(to_email, link):
    sg = SendGridAPIClient(api_key=current_app.config['SENDGRID_API_KEY'])
    message = Mail(from_email=(current_app.config['MAIL_FROM'], current_app.config['MAIL_FROM_NAME']),
                   to_emails=to_email,
                   subject=MAGIC_LINK_SUBJECT,
                   html_content=magic_link_html(link, current_app.config['MAGIC_LINK_MAX_AGE']))
    resp = sg.send(message)
    return resp.status_code, getattr(resp, 'headers', None)
