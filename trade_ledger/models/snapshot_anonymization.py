from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class SnapshotAnonymization(Base):
    __tablename__ = "snapshot_anonymizations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[str] = mapped_column(ForeignKey("companies.id"), nullable=False)
    # Not a foreign key: the customer row is gone once this is written.
    customer_id: Mapped[str] = mapped_column(String(32), nullable=False)
    documents_anonymized: Mapped[int] = mapped_column(Integer, nullable=False)
    jobs_anonymized: Mapped[int] = mapped_column(Integer, nullable=False)
    anonymized_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    anonymized_by: Mapped[str] = mapped_column(String(150), nullable=False)
