# Fichier: academy/schemas/user_schema.py
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


# --- Base schema ---
class UserBase(BaseModel):
    email: EmailStr
    display_name: Optional[str] = None
    photo_url: Optional[str] = None


# --- Sign-in upsert ---
# The id comes from the external identity provider, never from us.
class UserUpsert(UserBase):
    id: str


# --- Profile edits ---
class UserUpdate(BaseModel):
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    preferred_language: Optional[str] = None


# --- API response ---
class User(UserBase):
    id: str
    level: int
    experience_points: int
    global_rank: int
    total_time_spent: int
    algorithms_completed: int
    current_streak: int
    longest_streak: int
    preferred_language: str
    created_at: datetime
    last_active: datetime

    class Config:
        from_attributes = True
