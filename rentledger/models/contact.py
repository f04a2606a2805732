"""Contact and Inquiry models for the inquiry pipeline."""

import uuid

from sqlalchemy import JSON, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentledger.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Contact(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A lead or partner (travel agency, returning client) who sends inquiries."""

    __tablename__ = "contacts"

    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), index=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    company: Mapped[str | None] = mapped_column(String(255))
    tags: Mapped[list | None] = mapped_column(JSON, default=list)
    notes: Mapped[str | None] = mapped_column(Text)

    # Relationships
    inquiries: Mapped[list["Inquiry"]] = relationship(
        back_populates="contact",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, name={self.first_name!r} {self.last_name!r})>"


class Inquiry(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A request from a contact, tracked through NEW -> IN_PROGRESS -> CLOSED."""

    __tablename__ = "inquiries"

    contact_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("contacts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="NEW", nullable=False)  # NEW, IN_PROGRESS, CLOSED

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="inquiries", lazy="selectin")

    __table_args__ = (Index("ix_inquiries_status", "status"),)

    def __repr__(self) -> str:
        return f"<Inquiry(id={self.id}, subject={self.subject!r}, status={self.status})>"
