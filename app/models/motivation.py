from sqlalchemy import Column, Integer, String, DateTime, Text
from app.core.base import Base

class MotivationalQuote(Base):
    __tablename__ = "motivational_quotes"

    id = Column(Integer, primary_key=True)
    quote = Column(Text, nullable=False)
    author = Column(String, nullable=True)
    category = Column(String, nullable=False, index=True)

class DailyChallenge(Base):
    __tablename__ = "daily_challenges"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String, nullable=False)
    difficulty = Column(String, nullable=False)
    points = Column(Integer, default=10, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
