"""
People Profile — ORM model registry.

Importing every model here ensures that Alembic (and any other tool that
inspects ``Base.metadata``) discovers all tables automatically.
"""

from app.models.user_profile import UserProfile
from app.models.values import CoreValues, CharacterStrengths
from app.models.chronotype import Chronotype
from app.models.big_five import BigFiveProfile
from app.models.goals import Goals

__all__ = [
    "UserProfile",
    "CoreValues",
    "CharacterStrengths",
    "Chronotype",
    "BigFiveProfile",
    "Goals",
]
