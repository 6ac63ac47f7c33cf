import logging

from models import db
from models.courses import Course
from classes.content_writers import TopicWriter, StudyResourceWriter

logger = logging.getLogger(__name__)


class CourseReplacer:
    """Delete-all/insert-all replacement of a semester's course tree.

    Runs inside the caller's session transaction and never commits; the
    caller commits once or rolls back the whole replacement.
    """

    @staticmethod
    def build_course(course_payload, default_credits):
        return Course(
            title=course_payload.get("title"),
            course_code=course_payload.get("course_code") or course_payload.get("code"),
            teacher_name=course_payload.get("teacher_name"),
            teacher_email=course_payload.get("teacher_email") or None,
            credits=course_payload.get("credits") or default_credits or 3,
            description=course_payload.get("description") or "",
            is_highlighted=bool(course_payload.get("is_highlighted") or False),
        )

    @staticmethod
    def replace(semester, course_payloads):
        removed = len(semester.courses)
        # delete-orphan cascades through topics, slides, videos and study tools
        semester.courses.clear()
        db.session.flush()

        courses = []
        for course_payload in course_payloads:
            course = CourseReplacer.build_course(course_payload, semester.default_credits)
            semester.courses.append(course)

            topics = course_payload.get("topics")
            if topics:
                TopicWriter.write(course, topics)

            resources = StudyResourceWriter.resources_for(course_payload)
            if resources:
                StudyResourceWriter.write(course, resources)

            courses.append(course)

        db.session.flush()
        logger.info(
            "Replaced courses for semester %s: removed %d, created %d",
            semester.id, removed, len(courses),
        )
        return courses
