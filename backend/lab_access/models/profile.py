from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from lab_access.core.database import Base
import enum

class UserRole(str, enum.Enum):
    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"

class Department(str, enum.Enum):
    CSE = "CSE"  # Computer Science Engineering
    ECE = "ECE"  # Electronics and Communication
    EEE = "EEE"  # Electrical and Electronics
    ME = "ME"    # Mechanical Engineering
    CE = "CE"    # Civil Engineering
    IT = "IT"    # Information Technology
    AI = "AI"    # Artificial Intelligence

class Designation(str, enum.Enum):
    ASSISTANT_PROFESSOR = "Assistant Professor"
    ASSOCIATE_PROFESSOR = "Associate Professor"
    PROFESSOR = "Professor"
    HOD = "HOD"
    LAB_INSTRUCTOR = "Lab Instructor"

def _enum_values(enum_cls):
    return [member.value for member in enum_cls]

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("identities.id", ondelete="CASCADE"), unique=True, nullable=False)
    role = Column(Enum(UserRole, name="user_role", values_callable=_enum_values), nullable=False)
    login_id = Column(String, unique=True, index=True, nullable=False)  # e.g. F3210, immutable
    name = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    email = Column(String, nullable=True)

    # Faculty
    department = Column(String, nullable=True)
    designation = Column(String, nullable=True)

    # Student
    register_number = Column(String, nullable=True)
    year = Column(Integer, nullable=True)
    branch = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    identity = relationship("Identity", back_populates="profile")
