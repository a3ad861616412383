"""
Equipment status report model.

Reports are append-only: rows are inserted, never updated or deleted.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from backend.app.db.session import Base


class Report(Base):
    __tablename__ = "reports"
    __table_args__ = (
        CheckConstraint(
            "status IN ('working', 'faulty', 'maintenance')",
            name="ck_reports_status",
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Ownership - always the authenticated reporter
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    equipment_id = Column(String(100), nullable=True, index=True)
    status = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)

    # Generated attachment name, see services/attachments.py
    audio_file = Column(String(255), nullable=True, unique=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<Report(id={self.id}, equipment='{self.equipment_id}', status='{self.status}')>"
