from models import db, generate_id
from sqlalchemy.orm import relationship
from utils.helpers import format_datetime


class Course(db.Model):
    __tablename__ = "courses"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    semester_id = db.Column(
        db.String(36), db.ForeignKey("semesters.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = db.Column(db.String(255), nullable=False)
    course_code = db.Column(db.String(50), nullable=True)
    teacher_name = db.Column(db.String(255), nullable=True)
    teacher_email = db.Column(db.String(255), nullable=True)
    credits = db.Column(db.Integer, nullable=False, default=3)
    description = db.Column(db.Text, nullable=True, default="")
    is_highlighted = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    semester = relationship("Semester", back_populates="courses")
    topics = relationship(
        "Topic", back_populates="course", cascade="all, delete-orphan", order_by="Topic.order_index"
    )
    study_tools = relationship(
        "StudyTool", back_populates="course", cascade="all, delete-orphan", order_by="StudyTool.created_at"
    )

    def __repr__(self):
        return f"<Course {self.course_code} {self.title} (Semester ID {self.semester_id})>"

    def to_dict(self, nested=False):
        data = {
            "id": self.id,
            "semester_id": self.semester_id,
            "title": self.title,
            "course_code": self.course_code,
            "teacher_name": self.teacher_name,
            "teacher_email": self.teacher_email,
            "credits": self.credits,
            "description": self.description if self.description is not None else "",
            "is_highlighted": self.is_highlighted,
            "is_active": self.is_active,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }
        if nested:
            data["topics"] = [topic.to_dict(nested=True) for topic in self.topics]
            data["study_tools"] = [tool.to_dict() for tool in self.study_tools]
        return data
