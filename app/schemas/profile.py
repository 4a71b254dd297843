from __future__ import annotations

import re
import uuid
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MAX_LIST_ITEMS = 5
MIN_SCORE = 0
MAX_SCORE = 999


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_REGEX.match(email))


class TraitLevel(str, Enum):
    HIGH = "High"
    AVERAGE = "Average"
    LOW = "Low"


class ChronotypeAnimal(str, Enum):
    LION = "Lion"
    BEAR = "Bear"
    WOLF = "Wolf"
    DOLPHIN = "Dolphin"


def _validate_email(v: str) -> str:
    v = normalize_email(v)
    if not is_valid_email(v):
        raise ValueError("Invalid email format")
    return v


NormalizedEmail = Annotated[str, AfterValidator(_validate_email)]


def _coerce_date(v):
    # Accept full ISO datetimes ("1990-01-15T00:00:00Z") as well as plain dates.
    if isinstance(v, str) and "T" in v:
        return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
    if isinstance(v, datetime):
        return v.date()
    return v


# ── Big Five ───────────────────────────────────────────────────────────────

class Subtrait(BaseModel):
    name: str
    level: TraitLevel
    score: Optional[int] = Field(None, ge=MIN_SCORE, le=MAX_SCORE)


class BigFiveGroup(BaseModel):
    """A trait as shown to users: template name/colour plus six subtraits."""
    name: str
    color: str
    level: TraitLevel
    score: Optional[int] = Field(None, ge=MIN_SCORE, le=MAX_SCORE)
    subtraits: list[Subtrait] = []


class BigFiveTraitData(BaseModel):
    """A trait as stored in one of the ``*_data`` JSON columns."""
    group_name: Optional[str] = None
    overall_level: TraitLevel = TraitLevel.AVERAGE
    overall_score: Optional[int] = Field(None, ge=MIN_SCORE, le=MAX_SCORE)
    subtraits: list[Subtrait] = []


class BigFiveProfileUpdate(BaseModel):
    neuroticism_data: Optional[BigFiveTraitData] = None
    extraversion_data: Optional[BigFiveTraitData] = None
    openness_data: Optional[BigFiveTraitData] = None
    agreeableness_data: Optional[BigFiveTraitData] = None
    conscientiousness_data: Optional[BigFiveTraitData] = None


# ── Requests ───────────────────────────────────────────────────────────────

class ChronotypeUpdate(BaseModel):
    types: list[ChronotypeAnimal]
    primary_type: Optional[ChronotypeAnimal] = None

    @model_validator(mode="after")
    def _primary_must_be_selected(self) -> "ChronotypeUpdate":
        if not self.types:
            if self.primary_type is not None:
                raise ValueError("Primary type must be one of the selected types")
        elif self.primary_type is None or self.primary_type not in self.types:
            raise ValueError("Primary type must be one of the selected types")
        return self


class GoalsUpdate(BaseModel):
    period: str = Field(min_length=1, max_length=100)
    professional_goals: Optional[str] = None
    personal_goals: Optional[str] = None

    @field_validator("professional_goals", "personal_goals")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v if v else None


class ProfileCreate(BaseModel):
    user_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    email: NormalizedEmail
    name: str = Field(min_length=1, max_length=255)
    team: Optional[str] = Field(None, max_length=255)
    birthday: Optional[date] = None

    @field_validator("birthday", mode="before")
    @classmethod
    def _accept_datetime(cls, v):
        return _coerce_date(v)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    team: Optional[str] = Field(None, max_length=255)
    job_title: Optional[str] = Field(None, max_length=255)
    birthday: Optional[date] = None
    core_values: Optional[list[str]] = Field(None, max_length=MAX_LIST_ITEMS)
    character_strengths: Optional[list[str]] = Field(None, max_length=MAX_LIST_ITEMS)
    chronotype: Optional[ChronotypeUpdate] = None
    big_five_profile: Optional[BigFiveProfileUpdate] = None
    big_five_data: Optional[list[BigFiveGroup]] = None
    goals: Optional[GoalsUpdate] = None

    @field_validator("birthday", mode="before")
    @classmethod
    def _accept_datetime(cls, v):
        return _coerce_date(v)

    @field_validator("core_values", "character_strengths")
    @classmethod
    def _drop_blank_items(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        return [item.strip() for item in v if item and item.strip()]


class EmailLookup(BaseModel):
    email: NormalizedEmail


# ── Responses ──────────────────────────────────────────────────────────────

class CoreValuesOut(BaseModel):
    values: list[str] = []

    model_config = {"from_attributes": True}


class CharacterStrengthsOut(BaseModel):
    strengths: list[str] = []

    model_config = {"from_attributes": True}


class ChronotypeOut(BaseModel):
    types: list[str] = []
    primary_type: Optional[str] = None

    model_config = {"from_attributes": True}


class GoalsOut(BaseModel):
    period: str
    professional_goals: Optional[str] = None
    personal_goals: Optional[str] = None

    model_config = {"from_attributes": True}


class BigFiveProfileOut(BaseModel):
    id: uuid.UUID
    neuroticism_data: dict = {}
    extraversion_data: dict = {}
    openness_data: dict = {}
    agreeableness_data: dict = {}
    conscientiousness_data: dict = {}

    model_config = {"from_attributes": True}


class ProfileDetailResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    email: str
    name: str
    team: Optional[str] = None
    job_title: Optional[str] = None
    birthday: Optional[date] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    core_values: Optional[CoreValuesOut] = None
    character_strengths: Optional[CharacterStrengthsOut] = None
    chronotype: Optional[ChronotypeOut] = None
    big_five_profile: Optional[BigFiveProfileOut] = None
    goals: Optional[GoalsOut] = None
    big_five_data: list[BigFiveGroup] = []

    model_config = {"from_attributes": True}


class ProfileSummary(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    email: str
    name: str
    team: Optional[str] = None
    birthday: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    core_values: Optional[CoreValuesOut] = None
    character_strengths: Optional[CharacterStrengthsOut] = None
    chronotype: Optional[ChronotypeOut] = None
    has_big_five: bool = False
    completeness: int = 0


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ProfileListResponse(BaseModel):
    data: list[ProfileSummary]
    pagination: PaginationMeta


class BigFiveResponse(BaseModel):
    big_five_data: list[BigFiveGroup]


class DeleteResponse(BaseModel):
    success: bool = True
