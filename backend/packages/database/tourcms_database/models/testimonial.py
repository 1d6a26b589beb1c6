"""
Testimonial model definition.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, generate_uuid


class Testimonial(Base, TimestampMixin):
    """
    Customer testimonial in the base language.

    Attributes:
        id: Unique testimonial identifier.
        name: Customer name (never translated).
        role: Customer role or origin label.
        content: Testimonial text.
        package_name: Name of the package the customer booked.
        location: Customer location.
        rating: Star rating (1-5).
        image: Customer photo URL.
        status: Moderation status (pending/approved).
    """

    __tablename__ = "testimonials"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    package_name: Mapped[str | None] = mapped_column(String(500))
    location: Mapped[str | None] = mapped_column(String(255))
    rating: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    image: Mapped[str | None] = mapped_column(String(2000))
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False, index=True)
