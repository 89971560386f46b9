"""Secret ORM model — one row per named credential."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from secret_mcp.database import Base


class Secret(Base):
    __tablename__ = "secrets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # uuid4
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)  # plaintext at rest
    created_at: Mapped[int] = mapped_column(Integer, nullable=False)  # epoch seconds
    updated_at: Mapped[int] = mapped_column(Integer, nullable=False)
