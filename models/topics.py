from models import db, generate_id
from sqlalchemy.orm import relationship
from utils.helpers import format_datetime


class Topic(db.Model):
    __tablename__ = "topics"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    course_id = db.Column(
        db.String(36), db.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True, default="")
    order_index = db.Column(db.Integer, nullable=False, default=0)
    is_published = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    course = relationship("Course", back_populates="topics")
    slides = relationship(
        "Slide", back_populates="topic", cascade="all, delete-orphan", order_by="Slide.order_index"
    )
    videos = relationship(
        "Video", back_populates="topic", cascade="all, delete-orphan", order_by="Video.order_index"
    )

    @staticmethod
    def get_next_order(course_id):
        last_topic = Topic.query.filter_by(course_id=course_id).order_by(Topic.order_index.desc()).first()
        return (last_topic.order_index + 1) if last_topic else 1

    def __repr__(self):
        return f"<Topic {self.title} (Course ID {self.course_id})>"

    def to_dict(self, nested=False):
        data = {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "description": self.description if self.description is not None else "",
            "order_index": self.order_index,
            "is_published": self.is_published,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }
        if nested:
            data["slides"] = [slide.to_dict() for slide in self.slides]
            data["videos"] = [video.to_dict() for video in self.videos]
        return data
