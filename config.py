import os
from datetime import timedelta
from dotenv import load_dotenv

from utils.logic import EligibilityPolicy

load_dotenv("secrets.env")


def _env_float(name, default):
    value = os.environ.get(name)
    return float(value) if value else default


def _env_int(name, default):
    value = os.environ.get(name)
    return int(value) if value else default


class Config:
    # Secret key for session management
    SECRET_KEY = os.environ.get("SECRET_KEY") or "internlog-secret-key-123"

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL"
    ) or "sqlite:///" + os.path.join(basedir, "internlog.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Sessions expire at the end of the login day as well (see routes.auth)
    PERMANENT_SESSION_LIFETIME = timedelta(days=1)

    # Proof images are stored inline as data URLs
    MAX_PROOF_IMAGE_BYTES = 2 * 1024 * 1024
    MAX_CONTENT_LENGTH = 4 * 1024 * 1024

    # Spreadsheet endpoint (Apps Script web app returning {interns, activities})
    SHEET_API_URL = os.environ.get("SHEET_API_URL", "")
    SHEET_TIMEOUT = _env_int("SHEET_TIMEOUT", 10)
    SHEET_CACHE_TIMEOUT = _env_int("SHEET_CACHE_TIMEOUT", 60)
    CACHE_TYPE = os.environ.get("CACHE_TYPE", "SimpleCache")

    # Description grading
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")

    ADMIN_INTERN_ID = os.environ.get("ADMIN_INTERN_ID", "ADMIN-001").strip().upper()
    ADMIN_NAME = os.environ.get("ADMIN_NAME", "Program Admin")
    EMAIL_DOMAIN = os.environ.get("EMAIL_DOMAIN", "cial.org")
    DEFAULT_JOINING_DATE = "2024-05-01"

    # Program rules
    PROGRAM_MIN_ACTIVE_DAYS = _env_int("PROGRAM_MIN_ACTIVE_DAYS", 90)
    PROGRAM_MIN_HOURS_PER_DAY = _env_float("PROGRAM_MIN_HOURS_PER_DAY", 2.5)
    PROGRAM_MAX_GAP_DAYS = _env_int("PROGRAM_MAX_GAP_DAYS", 3)
    PROGRAM_TOTAL_MONTHS = _env_int("PROGRAM_TOTAL_MONTHS", 3)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    @staticmethod
    def build_policy(config):
        """Build the eligibility policy from an app config mapping."""
        return EligibilityPolicy(
            min_active_days=config["PROGRAM_MIN_ACTIVE_DAYS"],
            min_average_hours=config["PROGRAM_MIN_HOURS_PER_DAY"],
            max_gap_days=config["PROGRAM_MAX_GAP_DAYS"],
        )


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    CACHE_TYPE = "NullCache"
    SHEET_API_URL = ""
    GEMINI_API_KEY = None
    PROGRAM_MIN_ACTIVE_DAYS = 60
    LOG_LEVEL = "WARNING"
