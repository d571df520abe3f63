"""Job application model."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from jobtracker.core.storage import Base
from jobtracker.schemas.application import JobApplication


class ApplicationRecord(Base):
    """One stored application aggregate.

    The whole aggregate, including its history, notes and activities, lives in
    ``document`` so every save is a single-row write. The scalar columns are
    copies kept for indexing and ordering.
    """

    __tablename__ = "job_applications"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    application_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    document: Mapped[dict] = mapped_column(JSON, nullable=False)

    @classmethod
    def from_domain(cls, app: JobApplication) -> "ApplicationRecord":
        record = cls(id=app.id)
        record.update_from(app)
        return record

    def update_from(self, app: JobApplication) -> None:
        """Overwrite this row with the given application state."""
        self.user_id = app.user_id
        self.status = app.status.value
        self.application_date = app.application_date
        self.last_updated = app.last_updated
        self.document = app.model_dump(mode="json")

    def to_domain(self) -> JobApplication:
        return JobApplication.model_validate(self.document)
