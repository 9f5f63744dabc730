"""ORM model for user records in tbl_users."""

from sqlalchemy import Column, Integer, String

from usersapi.models.base import Base

# Upper bound of the Integer id column (int4 on PostgreSQL).
MAX_USER_ID = 2**31 - 1

# Columns a client may write on create or update (id and the hash are managed here).
MUTABLE_FIELDS = ("firstname", "fullname", "lastname", "username", "status")


class User(Base):
    """
    A user record. The password column only ever holds a bcrypt hash.

    status is an application-defined token (e.g. 'active', 'inactive').
    """

    __tablename__ = "tbl_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(255), nullable=True)
    fullname = Column(String(255), nullable=True)
    lastname = Column(String(255), nullable=True)
    username = Column(String(255), nullable=True, unique=True, index=True)
    password_hash = Column("password", String(255), nullable=False)
    status = Column(String(32), nullable=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
