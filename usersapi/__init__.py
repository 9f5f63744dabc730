"""users-api: CRUD service for user records with bcrypt-hashed passwords."""

__version__ = "0.1.0"
