import logging

from models.topics import Topic
from models.slides import Slide
from models.videos import Video
from models.study_tools import StudyTool
from utils.helpers import first_present

logger = logging.getLogger(__name__)

# The admin form sends these in content_url while the real URL field is still empty.
CONTENT_URL_PLACEHOLDERS = ("text", "file")


def _order_index(payload, position):
    order_index = payload.get("order_index")
    return position if order_index is None else order_index


class ContentLeafWriter:
    """Builds the slide and video rows that hang off a topic."""

    @staticmethod
    def build_slides(slides):
        return [
            Slide(
                title=slide.get("title"),
                google_drive_url=first_present(slide, "google_drive_url", "url"),
                description=slide.get("description") or "",
                order_index=_order_index(slide, position),
            )
            for position, slide in enumerate(slides or [])
        ]

    @staticmethod
    def build_videos(videos):
        return [
            Video(
                title=video.get("title"),
                youtube_url=first_present(video, "youtube_url", "url"),
                description=video.get("description") or "",
                order_index=_order_index(video, position),
            )
            for position, video in enumerate(videos or [])
        ]


class TopicWriter:
    @staticmethod
    def write(course, topics):
        """Attach a topic (with its slides and videos) to `course` for every payload."""
        created = []
        for position, payload in enumerate(topics or []):
            topic = Topic(
                title=payload.get("title"),
                description=payload.get("description") or "",
                order_index=_order_index(payload, position),
            )
            topic.slides = ContentLeafWriter.build_slides(payload.get("slides"))
            topic.videos = ContentLeafWriter.build_videos(payload.get("videos"))
            course.topics.append(topic)
            created.append(topic)

        logger.debug("Queued %d topics for course %r", len(created), course.title)
        return created


class StudyResourceWriter:
    @staticmethod
    def resources_for(course_payload):
        return course_payload.get("study_resources") or course_payload.get("studyTools") or []

    @staticmethod
    def content_url(payload):
        content_url = payload.get("content_url")
        if content_url in CONTENT_URL_PLACEHOLDERS:
            return None
        return content_url or payload.get("url") or None

    @staticmethod
    def write(course, resources):
        created = []
        for payload in resources or []:
            tool = StudyTool(
                title=payload.get("title"),
                type=payload.get("type") or "exam_note",
                content_url=StudyResourceWriter.content_url(payload),
                exam_type=payload.get("exam_type") or "both",
                description=payload.get("description") or "",
            )
            course.study_tools.append(tool)
            created.append(tool)

        logger.debug("Queued %d study resources for course %r", len(created), course.title)
        return created
