import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship

from jobboard.database import Base


class UserRole(str, enum.Enum):
    APPLICANT = "applicant"
    EMPLOYER = "employer"
    ADMIN = "admin"


def enum_column(enum_cls, name):
    """Persist enum values ("full-time"), not member names ("FULL_TIME")."""
    return Enum(enum_cls, name=name, values_callable=lambda e: [member.value for member in e])


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    role = Column(enum_column(UserRole, "user_role"), default=UserRole.APPLICANT, nullable=False, index=True)
    profile_image = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    resumes = relationship("Resume", back_populates="user", cascade="all", passive_deletes=True)
    jobs = relationship("Job", back_populates="employer", cascade="all", passive_deletes=True)
    applications = relationship("Application", back_populates="applicant", cascade="all", passive_deletes=True)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"
