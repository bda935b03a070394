"""User domain model"""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class UserBase(BaseModel):
    """Base user fields"""
    name: str
    email: str
    pending_tasks: List[str] = Field(default_factory=list)


class UserCreate(UserBase):
    """User creation model"""
    pass


class UserUpdate(BaseModel):
    """User update model - all fields optional"""
    name: Optional[str] = None
    email: Optional[str] = None
    pending_tasks: Optional[List[str]] = None


class User(UserBase):
    """Complete user model from database"""
    id: str  # UUID as string
    date_created: datetime

    class Config:
        from_attributes = True
