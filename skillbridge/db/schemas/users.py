from datetime import datetime
from typing import Annotated, List, Optional
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from skillbridge.db.models import UserType, DEFAULT_AVAILABILITY
from skillbridge.db.validation import require_email

# Format-checked but kept exactly as given; lookups on email are case-sensitive
Email = Annotated[str, AfterValidator(lambda value: require_email("email", value))]


class UserBase(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: Email
    user_type: UserType
    bio: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    skills: List[str] = Field(default_factory=list)
    portfolio: List[str] = Field(default_factory=list)
    availability: Optional[str] = DEFAULT_AVAILABILITY


class UserCreate(UserBase):
    password: str = Field(min_length=6)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[Email] = None
    password: Optional[str] = Field(default=None, min_length=6)
    bio: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    skills: Optional[List[str]] = None
    portfolio: Optional[List[str]] = None
    availability: Optional[str] = None


class User(UserBase):
    """Read model. Deliberately has no ``password`` field."""
    # Stored values are echoed verbatim
    email: str
    id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

    @field_validator('skills', 'portfolio', mode='before')
    @classmethod
    def _materialize(cls, value):
        return list(value) if value is not None else []


class PaginatedUsers(BaseModel):
    items: List[User]
    total_items: int
    total_pages: int
    skip: int
    limit: int
