"""
models/__init__.py
------------------
Re-export all models so create_tables.py (and Alembic, if added) can
discover every table via a single import:

    from ridsport.models import Base
"""

from ridsport.db.base import Base
from ridsport.models.booking import Booking
from ridsport.models.enums import BookingStatus, LessonType, ProgressCategory, UserRole
from ridsport.models.lesson import Lesson
from ridsport.models.message import Message
from ridsport.models.progress_report import ProgressReport
from ridsport.models.tenant import Tenant
from ridsport.models.user import User

__all__ = [
    "Base",
    "Tenant",
    "User",
    "UserRole",
    "Lesson",
    "LessonType",
    "Booking",
    "BookingStatus",
    "Message",
    "ProgressReport",
    "ProgressCategory",
]
