from datetime import datetime

from sqlalchemy import Column, Integer, Float, String, DateTime, Text
from app.core.base import Base

class WeightEntry(Base):
    __tablename__ = "weight_entries"

    id = Column(Integer, primary_key=True)
    weight = Column(Float, nullable=False)
    unit = Column(String, default="lbs", nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True)
    height = Column(Float, nullable=True)
    height_unit = Column(String, default="inches", nullable=False)
    age = Column(Integer, nullable=True)
    gender = Column(String, default="male", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
