"""Pin the environment before the application modules read settings."""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "dev"
os.environ["EXPOSE_PASSWORD_HASH"] = "false"
