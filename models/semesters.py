from models import db, generate_id
from sqlalchemy.orm import relationship
from utils.helpers import format_date, format_datetime


class Semester(db.Model):
    __tablename__ = "semesters"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True, default="")
    section = db.Column(db.String(50), nullable=False, index=True)  # "{batch}_{section}", e.g. "63_A"
    has_midterm = db.Column(db.Boolean, nullable=False, default=True)
    has_final = db.Column(db.Boolean, nullable=False, default=True)
    start_date = db.Column(db.Date, nullable=True)
    end_date = db.Column(db.Date, nullable=True)
    default_credits = db.Column(db.Integer, nullable=False, default=3)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    courses = relationship(
        "Course",
        back_populates="semester",
        cascade="all, delete-orphan",
        order_by="Course.created_at",
    )

    @property
    def batch(self):
        if not self.section:
            return None
        return self.section.split("_")[0] or None

    def __repr__(self):
        return f"<Semester {self.title} ({self.section})>"

    def to_dict(self, nested=False):
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description if self.description is not None else "",
            "section": self.section,
            "has_midterm": self.has_midterm,
            "has_final": self.has_final,
            "start_date": format_date(self.start_date),
            "end_date": format_date(self.end_date),
            "default_credits": self.default_credits,
            "is_active": self.is_active,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }
        if nested:
            data["courses"] = [course.to_dict(nested=True) for course in self.courses]
        return data
