"""Test environment: in-memory SQLite, fixed secrets and a cheap bcrypt cost.

Set before any blog_api module is imported, since settings are read at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "dev"
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["ADMIN_EMAILS"] = '["admin@example.com"]'
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
