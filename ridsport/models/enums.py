"""
models/enums.py
---------------
Closed value sets shared by models, schemas and the authorization policy.

Member names are English; values are what the riding schools see in the
app and what is persisted, so they stay stable across API versions.
"""

from enum import Enum as PyEnum


class UserRole(str, PyEnum):
    rider = "Ryttare"
    trainer = "Tränare"
    admin = "Admin"


class LessonType(str, PyEnum):
    show_jumping = "Hopplektion"
    dressage = "Dressyr"
    cross_country = "Terrängridning"
    basic_training = "Grundutbildning"


class BookingStatus(str, PyEnum):
    confirmed = "Bekräftad"
    pending = "Väntande"
    cancelled = "Avbokad"


class ProgressCategory(str, PyEnum):
    balance = "Balans"
    tempo = "Tempo"
    jumping = "Hopp"
    dressage = "Dressyr"
    general = "Allmänt"
