import re
from datetime import datetime
from typing import Any, ClassVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from app.services.media_service import is_http_url
from app.utils.object_id import normalize_object_id

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdateModel(CamelModel):
    """
    Explicit partial update: only fields the client sent are applied, unknown
    fields are rejected and non-nullable fields may not be cleared with null.
    """

    model_config = ConfigDict(extra="forbid")

    NON_NULLABLE: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_for_required(self):
        for field in self.NON_NULLABLE:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{to_camel(field)} cannot be null")
        return self

    def to_update_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


def _check_image_url(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not is_http_url(value):
        raise ValueError("must be an http(s) URL")
    return value


def _check_email(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not EMAIL_PATTERN.fullmatch(value):
        raise ValueError("must be a valid email address")
    return value


# ===== Auth =====


class UserLogin(BaseModel):
    name: str = Field(..., description="Account name; surrounding whitespace is ignored")
    password: str = Field(..., min_length=1, description="Password for login")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _strip_required(v)


class UserInfo(BaseModel):
    id: str = Field(..., description="Account identifier")
    email: str = Field(..., description="Account email")
    name: str = Field(..., description="Display name")

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    token: str = Field(
        ...,
        description="Session token, also set as the auth cookie; the cookie is authoritative",
    )
    user: UserInfo


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


# ===== Projects =====


class ProjectCreate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., max_length=255)
    description: str
    long_description: str | None = None
    image_url: str = Field(..., max_length=2048)
    category: str = Field(default="General", max_length=100)
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    order: int = 0

    @field_validator("title", "description", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str) -> str:
        return _check_image_url(v)


class ProjectUpdate(PartialUpdateModel):
    NON_NULLABLE = (
        "title",
        "description",
        "image_url",
        "category",
        "tags",
        "featured",
        "order",
    )

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    long_description: str | None = None
    image_url: str | None = Field(default=None, max_length=2048)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = None
    featured: bool | None = None
    order: int | None = Field(
        default=None, description="New rank for this project only; may tie with others"
    )

    @field_validator("title", "description", "category")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        return _check_image_url(v)


class ProjectResponse(CamelModel):
    id: str
    title: str
    description: str
    long_description: str | None = None
    image_url: str
    category: str
    tags: list[str] = Field(default_factory=list)
    featured: bool
    order: int
    created_at: datetime
    updated_at: datetime


class ReorderRequest(BaseModel):
    item_ids: list[str] = Field(
        ...,
        validation_alias=AliasChoices("itemIds", "projectIds", "item_ids"),
        description="Every project id in the desired display order",
    )

    @field_validator("item_ids")
    @classmethod
    def check_ids(cls, v: list[str]) -> list[str]:
        normalized = []
        for index, item_id in enumerate(v):
            canonical = normalize_object_id(item_id)
            if canonical is None:
                raise ValueError(f"itemIds[{index}] is not a valid id: {item_id!r}")
            normalized.append(canonical)
        return normalized


# ===== Contacts =====


class ContactCreate(CamelModel):
    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    message: str

    @field_validator("name", "message")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _check_email(v)


class ContactUpdate(PartialUpdateModel):
    NON_NULLABLE = ("name", "email", "message", "read")

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    message: str | None = None
    read: bool | None = None

    @field_validator("name", "message")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str | None:
        return _check_email(v)


class ContactResponse(CamelModel):
    id: str
    name: str
    email: str
    message: str
    read: bool
    created_at: datetime
    updated_at: datetime


# ===== About =====


class SocialLinks(CamelModel):
    linkedin: str | None = None
    github: str | None = None
    twitter: str | None = None
    instagram: str | None = None


class ExperienceItem(CamelModel):
    company: str = ""
    position: str = ""
    duration: str = ""
    description: str = ""


class EducationItem(CamelModel):
    institution: str = ""
    degree: str = ""
    duration: str = ""


class AboutUpdate(PartialUpdateModel):
    NON_NULLABLE = (
        "name",
        "title",
        "bio",
        "long_bio",
        "email",
        "profile_image",
        "social_links",
        "skills",
        "experience",
        "education",
    )

    name: str | None = Field(default=None, max_length=255)
    title: str | None = Field(default=None, max_length=255)
    bio: str | None = None
    long_bio: str | None = None
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    location: str | None = Field(default=None, max_length=255)
    profile_image: str | None = None
    hero_image: str | None = None
    resume_url: str | None = None
    social_links: SocialLinks | None = None
    skills: list[str] | None = None
    experience: list[ExperienceItem] | None = None
    education: list[EducationItem] | None = None

    @field_validator("name", "title")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str | None:
        return _check_email(v)

    @field_validator("profile_image", "hero_image")
    @classmethod
    def check_image_url(cls, v: str | None) -> str | None:
        return _check_image_url(v)


class AboutResponse(CamelModel):
    id: str
    name: str
    title: str
    bio: str
    long_bio: str
    email: str
    phone: str | None = None
    location: str | None = None
    profile_image: str
    hero_image: str | None = None
    resume_url: str | None = None
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceItem] = Field(default_factory=list)
    education: list[EducationItem] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# ===== Uploads =====


class UploadResponse(CamelModel):
    url: str = Field(..., description="Public URL of the uploaded image")
    public_id: str | None = Field(default=None, description="Media host asset id")
