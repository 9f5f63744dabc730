"""Unit tests for usersapi.core.config: defaults, URL assembly and validators."""

import unittest

from pydantic import ValidationError

from usersapi.core.config import Settings


def _settings(**kwargs: object) -> Settings:
    """Settings isolated from .env and from the test DATABASE_URL override."""
    kwargs.setdefault("DATABASE_URL", None)
    return Settings(_env_file=None, **kwargs)


class TestDefaults(unittest.TestCase):
    def test_port_defaults_to_3000(self) -> None:
        self.assertEqual(_settings().PORT, 3000)

    def test_hash_redacted_by_default(self) -> None:
        self.assertFalse(_settings(EXPOSE_PASSWORD_HASH=False).EXPOSE_PASSWORD_HASH)


class TestDatabaseUrl(unittest.TestCase):
    def test_built_from_parts(self) -> None:
        s = _settings(
            DB_HOST="db.internal",
            DB_PORT=5433,
            DB_USER="svc",
            DB_PASS="s3cret",
            DB_NAME="accounts",
        )
        url = s.database_url
        self.assertEqual(url.drivername, "postgresql+asyncpg")
        self.assertEqual(url.host, "db.internal")
        self.assertEqual(url.port, 5433)
        self.assertEqual(url.username, "svc")
        self.assertEqual(url.password, "s3cret")
        self.assertEqual(url.database, "accounts")

    def test_empty_password_is_omitted(self) -> None:
        self.assertIsNone(_settings(DB_PASS="").database_url.password)

    def test_database_url_overrides_parts(self) -> None:
        s = _settings(DATABASE_URL="sqlite+aiosqlite://", DB_HOST="ignored")
        self.assertEqual(s.database_url.get_backend_name(), "sqlite")

    def test_blank_database_url_falls_back_to_parts(self) -> None:
        s = _settings(DATABASE_URL="   ", DB_HOST="db.internal")
        self.assertEqual(s.database_url.host, "db.internal")

    def test_sync_driver_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="postgresql://u:p@localhost/db")
        with self.assertRaises(ValidationError):
            _settings(DB_DRIVER="mysql+pymysql")


class TestValidators(unittest.TestCase):
    def test_port_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(PORT=0)
        with self.assertRaises(ValidationError):
            _settings(PORT=70000)

    def test_bcrypt_rounds_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)
        self.assertEqual(_settings(BCRYPT_ROUNDS=12).BCRYPT_ROUNDS, 12)

    def test_blank_host_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DB_HOST="  ")

    def test_log_level_case_insensitive(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")


if __name__ == "__main__":
    unittest.main()
