# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class User(Base):
     """
     User model - central authentication table.
     An account owns properties, payments, repairs and contractors and may
     receive read-only shares of another account's properties.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password = Column(String(255), nullable=False)
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     properties = relationship("Property", back_populates="owner", cascade="all, delete-orphan")
     contractors = relationship("Contractor", back_populates="owner", cascade="all, delete-orphan")

     @property
     def full_name(self) -> str:
          return f"{self.first_name} {self.last_name}"

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
