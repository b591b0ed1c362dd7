from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    # Tables live in the connection's default schema so SQLite can host them too
    metadata = MetaData()
