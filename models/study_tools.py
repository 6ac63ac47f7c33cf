from models import db, generate_id
from sqlalchemy.orm import relationship
from utils.helpers import format_datetime

STUDY_TOOL_TYPES = ("previous_questions", "previous_question", "exam_note", "note", "syllabus")
EXAM_TYPES = ("midterm", "final", "both")


class StudyTool(db.Model):
    __tablename__ = "study_tools"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    course_id = db.Column(
        db.String(36), db.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(50), nullable=False, default="exam_note")
    content_url = db.Column(db.String(1024), nullable=True)
    exam_type = db.Column(db.String(20), nullable=False, default="both")
    description = db.Column(db.Text, nullable=True, default="")
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    course = relationship("Course", back_populates="study_tools")

    def __repr__(self):
        return f"<StudyTool {self.title} [{self.type}] (Course ID {self.course_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "type": self.type,
            "content_url": self.content_url,
            "exam_type": self.exam_type,
            "description": self.description if self.description is not None else "",
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }
