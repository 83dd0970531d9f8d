"""
Pydantic Schemas for Request/Response Validation

JSON bodies use camelCase keys (logoUrl, categoryId, ...) while Python
attributes stay snake_case; every model accepts either form on input.

Author: Khalil Bannouri
Version: 1.0.0
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
import re


class CamelModel(BaseModel):
    """Base model serializing to camelCase and reading ORM objects."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class LoginRequest(CamelModel):
    """Admin login credentials. Presence is checked by the route."""
    email: Optional[str] = Field(None, examples=["admin@restaurant.com"])
    password: Optional[str] = Field(None, examples=["admin123"])


class CategoryCreate(CamelModel):
    """Request schema for creating a category."""
    name: str = Field(..., max_length=200, examples=["المقبلات"])
    description: Optional[str] = Field(None, examples=["مقبلات شهية لفتح الشهية"])
    image: Optional[str] = Field(None, max_length=500, examples=["/appetizers.jpg"])
    order: Optional[int] = Field(None, examples=[1])
    visible: bool = Field(default=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _strip_required(v)


class CategoryUpdate(CamelModel):
    """Partial update; only keys present in the body are applied."""
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=500)
    order: Optional[int] = None
    visible: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _strip_required(v)


class MenuItemCreate(CamelModel):
    """Request schema for creating or replacing a menu item."""
    name: str = Field(..., max_length=200, examples=["حمص بالطحينة"])
    description: Optional[str] = Field(None, examples=["حمص كلاسيكي مع زيت الزيتون والفلفل"])
    price: str = Field(..., max_length=50, examples=["15 ريال"])
    category_id: int = Field(..., examples=[1])

    @field_validator("name", "price")
    @classmethod
    def validate_required(cls, v: str) -> str:
        return _strip_required(v)


class SettingsUpdate(CamelModel):
    """Partial settings update; only keys present in the body are applied."""
    name: Optional[str] = Field(None, max_length=200)
    logo_url: Optional[str] = Field(None, max_length=500)
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    background_color: Optional[str] = None
    contact_phone: Optional[str] = Field(None, max_length=50)
    contact_email: Optional[str] = None
    address: Optional[str] = None
    working_hours: Optional[str] = None
    welcome_text: Optional[str] = None

    @field_validator("primary_color", "secondary_color", "background_color")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not re.match(r'^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$', v):
            raise ValueError('Color must be a hex value such as #f59e0b')
        return v

    @field_validator('contact_email')
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        # Basic email validation
        if not re.match(r'^[\w\.-]+@[\w\.-]+\.\w+$', v):
            raise ValueError('Invalid email format')
        return v


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class SettingsResponse(CamelModel):
    """Restaurant settings as returned to the site and the admin panel."""
    id: int
    name: str
    logo_url: Optional[str] = None
    primary_color: str
    secondary_color: str
    background_color: str
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    address: Optional[str] = None
    working_hours: Optional[str] = None
    welcome_text: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MenuItemResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: str
    category_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    order: int
    visible: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryWithItemsResponse(CategoryResponse):
    """Category together with its items, oldest item first."""
    items: List[MenuItemResponse] = Field(default_factory=list)


class MenuItemWithCategoryResponse(MenuItemResponse):
    category: Optional[CategoryResponse] = None


class AdminUser(CamelModel):
    id: int
    email: str
    name: Optional[str] = None


class LoginResponse(CamelModel):
    """Response after a successful admin login."""
    message: str
    token: str
    user: AdminUser


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    cache: str
    timestamp: datetime
