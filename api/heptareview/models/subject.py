"""
Subject model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional


class Subject(SQLModel, table=True):
    """Subject table - named groups offered when filing cards."""
    __tablename__ = "subject"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
