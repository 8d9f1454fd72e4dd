"""courses table model."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from domain.handicap.course import CourseAttributes
from models.base import Base
from models.mixins import CreatedAtMixin


class Course(CreatedAtMixin, Base):
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("slope_rating > 0", name="ck_courses_slope_rating"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    par: Mapped[int] = mapped_column(Integer, nullable=False, default=72)
    course_rating: Mapped[float] = mapped_column(Float, nullable=False)
    slope_rating: Mapped[int] = mapped_column(Integer, nullable=False)

    def attributes(self) -> CourseAttributes:
        return CourseAttributes(
            par=self.par,
            course_rating=self.course_rating,
            slope_rating=self.slope_rating,
        )
