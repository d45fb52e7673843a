"""Test settings."""
from .base import *  # noqa: F401, F403

SECRET_KEY = "test-secret-key"

ALLOWED_HOSTS = ["testserver", "localhost"]
