"""
SQLAlchemy Database Models

Restaurant menu content:
- Restaurant settings (singleton: name, colors, contact info)
- Categories with display order and visibility
- Menu items with free-text prices
- Admin accounts

Author: Khalil Bannouri
Version: 1.0.0
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from restaurant_menu.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RestaurantSettings(Base):
    """
    Site-wide restaurant settings.

    Exactly one row is expected. It is created by the default-data
    reconciler (or lazily by the settings endpoints) and never deleted.
    """
    __tablename__ = "restaurant_settings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # =========================================================================
    # BRANDING
    # =========================================================================
    name = Column(String(200), nullable=False, default="مطعمنا المميز")
    logo_url = Column(String(500), nullable=True)
    primary_color = Column(String(20), nullable=False, default="#f59e0b")
    secondary_color = Column(String(20), nullable=False, default="#ea580c")
    background_color = Column(String(20), nullable=False, default="#fffbeb")

    # =========================================================================
    # CONTACT
    # =========================================================================
    contact_phone = Column(String(50), nullable=True)
    contact_email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    working_hours = Column(Text, nullable=True)
    welcome_text = Column(Text, nullable=True)

    # =========================================================================
    # TIMESTAMPS
    # =========================================================================
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<RestaurantSettings #{self.id} - {self.name}>"


class Category(Base):
    """
    Menu category.

    Names are meant to be unique but the constraint is not enforced;
    duplicates are repaired by services.cleanup. Items are removed
    explicitly before their category (see repository.delete_category_cascade).
    """
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    order = Column(Integer, nullable=False, default=0, index=True)
    visible = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    items = relationship(
        "MenuItem",
        back_populates="category",
        order_by=lambda: [MenuItem.created_at, MenuItem.id],
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Category #{self.id} - {self.name} (order={self.order})>"


class MenuItem(Base):
    """Single dish or drink. Price is display text such as "15 ريال"."""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(String(50), nullable=False)
    category_id = Column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    category = relationship("Category", back_populates="items")

    def __repr__(self):
        return f"<MenuItem #{self.id} - {self.name} - {self.price}>"


class Admin(Base):
    """Admin account used to sign in to the management API."""
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(200), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<Admin #{self.id} - {self.email}>"
