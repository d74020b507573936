"""
Database models for GoalMind Predictor
SQLAlchemy ORM model for the preference key-value table
"""
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Preference(Base):
    """
    Preference entry - one JSON-encoded list per key
    (e.g., goalmind_favorites, goalmind_history)
    """
    __tablename__ = "preferences"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)  # Raw JSON text, parsed on load
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Preference(key='{self.key}')>"
