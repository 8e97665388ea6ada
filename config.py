import os
from dotenv import load_dotenv
load_dotenv()


def _csv(value):
    return [v.strip().lower() for v in (value or "").split(",") if v.strip()]


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///careerweek.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
    MAIL_FROM = os.getenv("MAIL_FROM", "noreply@example.com")
    MAIL_FROM_NAME = os.getenv("MAIL_FROM_NAME", "CareerWeek")
    MAGIC_LINK_MAX_AGE = int(os.getenv("MAGIC_LINK_MAX_AGE", "900"))
    ALLOWED_EMAIL_DOMAINS = _csv(os.getenv("ALLOWED_EMAIL_DOMAINS"))
    CANDIDATES_PER_PAGE = int(os.getenv("CANDIDATES_PER_PAGE", "20"))
    HIRE_THRESHOLD = float(os.getenv("HIRE_THRESHOLD", "70"))
    UID_DOMAIN = os.getenv("UID_DOMAIN", "careerweek.local")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    # never talk to a real redis from the test suite
    REDIS_URL = None
    SENDGRID_API_KEY = "test-key"
    ALLOWED_EMAIL_DOMAINS = []
    CANDIDATES_PER_PAGE = 20
