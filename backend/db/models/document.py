"""Generic JSON document row used by the document store."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class Document(TimestampMixin, Base):
    """One document of a named collection.

    Attributes:
        collection: Collection name, e.g. "workflows"
        id: Document id, unique within its collection
        data: The full JSON document, including its own "id"
        created_at: Row creation timestamp
        updated_at: Last write timestamp
    """

    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(100), primary_key=True)
    id: Mapped[str] = mapped_column(String(200), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
