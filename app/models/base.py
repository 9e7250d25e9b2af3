#app/models/base.py
"""
Declarative base for every ORM model.

    from app.models.base import Base
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
