from models import db, generate_id
from sqlalchemy.orm import relationship
from utils.helpers import format_datetime


class Video(db.Model):
    __tablename__ = "videos"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    topic_id = db.Column(
        db.String(36), db.ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = db.Column(db.String(255), nullable=False)
    youtube_url = db.Column(db.String(1024), nullable=True)
    description = db.Column(db.Text, nullable=True, default="")
    duration = db.Column(db.String(20), nullable=True)
    order_index = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    topic = relationship("Topic", back_populates="videos")

    @staticmethod
    def get_next_order(topic_id):
        last = Video.query.filter_by(topic_id=topic_id).order_by(Video.order_index.desc()).first()
        return (last.order_index + 1) if last else 1

    def __repr__(self):
        return f"<Video {self.title} (Topic ID {self.topic_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "topic_id": self.topic_id,
            "title": self.title,
            "youtube_url": self.youtube_url,
            "description": self.description if self.description is not None else "",
            "duration": self.duration,
            "order_index": self.order_index,
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }
