from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Subject(Base):
    """Tracked individual or trainer. Credentials live elsewhere."""

    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    display_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="individual")  # individual, trainer
    height_cm = Column(Float)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    measurements = relationship("HealthMeasurementRecord", back_populates="subject")
    activity_logs = relationship("ActivityLogRecord", back_populates="subject")
    workouts = relationship("WorkoutRecord", back_populates="subject")
    goals = relationship("GoalRecord", back_populates="subject")
    alerts = relationship("AlertRecord", back_populates="subject")


class TrainerClient(Base):
    __tablename__ = "trainer_clients"
    __table_args__ = (UniqueConstraint("trainer_id", "client_id", name="uq_trainer_client"),)

    id = Column(Integer, primary_key=True, index=True)
    trainer_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    assigned_at = Column(DateTime, default=datetime.utcnow)


class HealthMeasurementRecord(Base):
    """Append-only measurement history; latest by date is current."""

    __tablename__ = "health_measurements"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    weight_kg = Column(Float, nullable=False)
    height_cm = Column(Float, nullable=False)
    bmi = Column(Float, nullable=False)
    category = Column(String(20), nullable=False)
    blood_pressure_systolic = Column(Integer)
    blood_pressure_diastolic = Column(Integer)
    resting_heart_rate = Column(Integer)
    measured_on = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    subject = relationship("Subject", back_populates="measurements")


class ActivityLogRecord(Base):
    __tablename__ = "activity_logs"
    __table_args__ = (UniqueConstraint("subject_id", "log_date", name="uq_activity_subject_date"),)

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    log_date = Column(Date, nullable=False, index=True)
    step_count = Column(Integer, nullable=False, default=0)
    calories_consumed = Column(Integer, nullable=False, default=0)
    calories_burned = Column(Integer, nullable=False, default=0)
    steps_goal = Column(Integer, nullable=False, default=10000)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = relationship("Subject", back_populates="activity_logs")


class WorkoutRecord(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    workout_type = Column(String(30), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    calories_burned = Column(Integer)
    intensity = Column(String(10), nullable=False, default="medium")  # low, medium, high
    workout_date = Column(Date, nullable=False, index=True)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    subject = relationship("Subject", back_populates="workouts")


class GoalRecord(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    goal_type = Column(String(30), nullable=False)
    target_value = Column(Float, nullable=False)
    current_value = Column(Float, nullable=False, default=0.0)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="in_progress")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = relationship("Subject", back_populates="goals")


class AlertRecord(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    alert_type = Column(String(30), nullable=False)
    message = Column(Text, nullable=False)
    severity = Column(String(10), nullable=False, default="info")  # info, warning, critical
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    subject = relationship("Subject", back_populates="alerts")


class TrainerPlanRecord(Base):
    __tablename__ = "trainer_plans"

    id = Column(Integer, primary_key=True, index=True)
    trainer_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    plan_type = Column(String(20), nullable=False)  # workout, diet, general
    title = Column(String(255), nullable=False)
    description = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
