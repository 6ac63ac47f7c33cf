import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.semesters import Semester
from models.courses import Course
from models.topics import Topic
from models.study_tools import StudyTool
from classes.course_replacer import CourseReplacer
from classes.content_writers import StudyResourceWriter
from classes.errors import NotFoundError, PersistenceError, ValidationError
from classes.validators import require_fields
from utils.helpers import bool_or_default, parse_date
from utils.utils import check_section_access, scoped_section

logger = logging.getLogger(__name__)


class SemesterManager:
    """Semester CRUD plus the nested course replacement used by the admin form."""

    @staticmethod
    def _semester_query(admin):
        query = Semester.query
        section = scoped_section(admin)
        if section:
            query = query.filter(Semester.section == section)
        return query

    @staticmethod
    def find_semester(semester_id, admin):
        semester = SemesterManager._semester_query(admin).filter(Semester.id == semester_id).first()
        if not semester:
            raise NotFoundError("Semester not found or access denied")
        return semester

    @staticmethod
    def split_payload(body):
        """Return (semester_fields, courses) from a `{semester, courses}` body."""
        if not isinstance(body, dict):
            body = {}
        semester = body.get("semester")
        require_fields(semester, "title", "section", message="Missing required fields: title and section")
        courses = SemesterManager._entries(body.get("courses"), "courses")
        for course in courses:
            for topic in SemesterManager._entries(course.get("topics"), "topics"):
                SemesterManager._entries(topic.get("slides"), "slides")
                SemesterManager._entries(topic.get("videos"), "videos")
            SemesterManager._entries(StudyResourceWriter.resources_for(course), "study_resources")
        return semester, courses

    @staticmethod
    def _entries(value, name):
        """A nested collection: a list of objects, or nothing at all."""
        if not value:
            return []
        if not isinstance(value, list):
            raise ValidationError(f"{name} must be a list")
        if not all(isinstance(entry, dict) for entry in value):
            raise ValidationError(f"Every entry in {name} must be an object")
        return value

    @staticmethod
    def semester_values(payload):
        try:
            start_date = parse_date(payload.get("start_date"))
            end_date = parse_date(payload.get("end_date"))
        except ValueError:
            raise ValidationError("Dates must use the YYYY-MM-DD format")

        if start_date and end_date and start_date > end_date:
            raise ValidationError("start_date must be on or before end_date")

        return {
            "title": str(payload["title"]).strip(),
            "description": payload.get("description") or "",
            "section": str(payload["section"]).strip(),
            "has_midterm": bool_or_default(payload.get("has_midterm")),
            "has_final": bool_or_default(payload.get("has_final")),
            "start_date": start_date,
            "end_date": end_date,
            "default_credits": payload.get("default_credits") or 3,
            "is_active": bool_or_default(payload.get("is_active")),
        }

    # ------------------------------------------------------------------ reads

    @staticmethod
    def semester_counts(semester_id):
        """Course, topic and study-resource counts, one follow-up query each."""
        courses_count = db.session.query(func.count(Course.id)).filter(Course.semester_id == semester_id).scalar()
        course_ids = db.session.query(Course.id).filter(Course.semester_id == semester_id)

        topics_count = 0
        study_resources_count = 0
        if courses_count:
            topics_count = db.session.query(func.count(Topic.id)).filter(Topic.course_id.in_(course_ids)).scalar()
            study_resources_count = db.session.query(func.count(StudyTool.id)).filter(
                StudyTool.course_id.in_(course_ids)
            ).scalar()

        return {
            "courses_count": courses_count or 0,
            "topics_count": topics_count or 0,
            "study_resources_count": study_resources_count or 0,
            "materials_count": (topics_count or 0) + (study_resources_count or 0),
        }

    @staticmethod
    def list_semesters(admin):
        try:
            semesters = SemesterManager._semester_query(admin).order_by(
                Semester.is_active.desc(), Semester.updated_at.desc()
            ).all()
            logger.info("Found %d semesters for %s (%s)", len(semesters), admin.email, admin.role)
            return [{**semester.to_dict(), **SemesterManager.semester_counts(semester.id)} for semester in semesters]
        except SQLAlchemyError:
            logger.exception("Failed to fetch semesters")
            raise PersistenceError("Failed to fetch semesters")

    @staticmethod
    def get_semester_tree(semester_id, admin):
        try:
            semester = SemesterManager.find_semester(semester_id, admin)
            return semester.to_dict(nested=True)
        except SQLAlchemyError:
            logger.exception("Failed to fetch semester %s", semester_id)
            raise PersistenceError("Failed to fetch semester")

    # ----------------------------------------------------------------- writes

    @staticmethod
    def create_semester(body, admin):
        payload, courses = SemesterManager.split_payload(body)
        values = SemesterManager.semester_values(payload)
        check_section_access(admin, values["section"], "manage semesters for")

        try:
            semester = Semester(**values)
            db.session.add(semester)
            db.session.flush()

            if courses:
                CourseReplacer.replace(semester, courses)

            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to create semester %r", values["title"])
            raise PersistenceError("Failed to create semester")

        logger.info("Semester %s (%s) created by %s with %d courses",
                    semester.id, semester.section, admin.email, len(courses))
        return semester

    @staticmethod
    def update_semester(semester_id, body, admin):
        semester = SemesterManager.find_semester(semester_id, admin)
        payload, courses = SemesterManager.split_payload(body)
        values = SemesterManager.semester_values(payload)
        check_section_access(admin, values["section"], "manage semesters for")

        try:
            for field, value in values.items():
                setattr(semester, field, value)
            semester.updated_at = db.func.now()

            if courses:
                CourseReplacer.replace(semester, courses)

            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to update semester %s", semester_id)
            raise PersistenceError("Failed to update semester")

        logger.info("Semester %s updated by %s (%d courses submitted)", semester_id, admin.email, len(courses))
        return semester

    @staticmethod
    def delete_semester(semester_id, admin):
        semester = SemesterManager.find_semester(semester_id, admin)
        title = semester.title

        try:
            db.session.delete(semester)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to delete semester %s", semester_id)
            raise PersistenceError("Failed to delete semester")

        logger.info("Semester %s (%r) deleted by %s", semester_id, title, admin.email)
        return title
