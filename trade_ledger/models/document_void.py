from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class DocumentVoid(Base):
    __tablename__ = "document_voids"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    document_id: Mapped[str] = mapped_column(
        ForeignKey("documents.id"), nullable=False, unique=True
    )
    reason: Mapped[str] = mapped_column(String(255), nullable=False)
    voided_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    voided_by: Mapped[str] = mapped_column(String(150), nullable=False)
