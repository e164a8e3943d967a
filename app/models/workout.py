from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Text
from sqlalchemy.orm import relationship
from app.core.base import Base

class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    instructions = Column(Text, nullable=True)
    difficulty = Column(String, default="beginner", nullable=False)
    muscle_groups = Column(JSON, default=list, nullable=False)
    equipment = Column(JSON, default=list, nullable=False)

class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    duration = Column(Integer, nullable=True)  # минуты
    notes = Column(Text, nullable=True)
    gender = Column(String, default="male", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    exercises = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order_index"
    )

class WorkoutExercise(Base):
    __tablename__ = "workout_exercises"

    id = Column(Integer, primary_key=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id"), nullable=False)
    order_index = Column(Integer, default=0, nullable=False)

    workout = relationship("Workout", back_populates="exercises")
    exercise = relationship("Exercise")
    sets = relationship(
        "WorkoutSet",
        back_populates="workout_exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutSet.set_number"
    )

class WorkoutSet(Base):
    __tablename__ = "sets"

    id = Column(Integer, primary_key=True)
    workout_exercise_id = Column(
        Integer, ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False, index=True
    )
    set_number = Column(Integer, nullable=False)
    weight = Column(String, nullable=True)  # десятичное число строкой, как пришло от клиента
    reps = Column(Integer, nullable=True)
    completed = Column(Integer, default=1, nullable=False)

    workout_exercise = relationship("WorkoutExercise", back_populates="sets")
