"""
Login accounts.

- UserRecord: one row per account (users)
- AuthorityRecord: roles granted to an account (authorities)
"""

from sqlmodel import SQLModel, Field


class UserRecord(SQLModel, table=True):
    """
    ORM Model for the users table.
    """

    __tablename__ = "users"

    username: str = Field(primary_key=True)
    password: str = Field(nullable=False, description="Encoded password hash.")
    enabled: bool = Field(default=True, nullable=False)


class AuthorityRecord(SQLModel, table=True):
    """
    ORM Model for the authorities table.
    """

    __tablename__ = "authorities"

    username: str = Field(foreign_key="users.username", primary_key=True)
    authority: str = Field(primary_key=True, description="Role name, e.g. USER.")
