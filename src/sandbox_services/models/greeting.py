"""SQLAlchemy model for stored greetings."""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from sandbox_services.db.session import Base


class Greeting(Base):
    """Immutable greeting message; ``id`` is assigned by the database."""

    __tablename__ = "greetings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
