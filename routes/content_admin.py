import logging

from flask import Blueprint, request, jsonify, g
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.semesters import Semester
from models.courses import Course
from models.topics import Topic
from models.slides import Slide
from models.videos import Video
from models.study_tools import StudyTool, STUDY_TOOL_TYPES, EXAM_TYPES
from classes.content_cache import get_content_cache
from classes.errors import NotFoundError, PersistenceError, ValidationError
from classes.validators import require_fields, is_google_drive_url, is_youtube_url
from utils.helpers import apply_updates, bool_or_default
from utils.utils import section_admin_required, scoped_section, check_section_access

logger = logging.getLogger(__name__)

content_admin_bp = Blueprint('content_admin', __name__)

COURSE_FIELDS = ("title", "course_code", "teacher_name", "teacher_email", "description",
                 "credits", "is_highlighted", "is_active")
TOPIC_FIELDS = ("title", "description", "order_index", "is_published")
SLIDE_FIELDS = ("title", "google_drive_url", "description", "file_size", "order_index")
VIDEO_FIELDS = ("title", "youtube_url", "description", "duration", "order_index")
STUDY_TOOL_FIELDS = ("title", "type", "content_url", "exam_type", "description")


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to %s", action)
        raise PersistenceError(f"Failed to {action}")
    get_content_cache().clear()


def _body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _get_or_404(model, object_id, label):
    instance = db.session.get(model, str(object_id)) if object_id else None
    if not instance:
        raise NotFoundError(f"{label} not found")
    return instance


def _id_from_body(data, label):
    object_id = data.get("id")
    if not object_id:
        raise ValidationError(f"{label} ID is required")
    return object_id


def _id_from_args(label):
    object_id = request.args.get("id")
    if not object_id:
        raise ValidationError(f"{label} ID is required")
    return object_id


def _scoped(query, *joins):
    """Restrict a listing to the caller's section when scoping is on."""
    section = scoped_section(g.admin)
    if not section:
        return query
    for target in joins:
        query = query.join(target)
    return query.filter(Semester.section == section)


def _validate_study_tool(data, partial=False):
    if "type" in data or not partial:
        if data.get("type") not in STUDY_TOOL_TYPES:
            raise ValidationError(f"Invalid type. Must be one of: {', '.join(STUDY_TOOL_TYPES)}")
    if data.get("exam_type") and data["exam_type"] not in EXAM_TYPES:
        raise ValidationError(f"Invalid exam_type. Must be one of: {', '.join(EXAM_TYPES)}")


#__________________________________________________________________________________________ * Courses *__________________________________________________

@content_admin_bp.route('/courses', methods=['GET'])
@section_admin_required
def list_courses():
    query = Course.query
    semester_id = request.args.get("semester_id")
    if semester_id:
        query = query.filter(Course.semester_id == semester_id)
    courses = _scoped(query, Course.semester).order_by(Course.created_at.desc()).all()

    results = []
    for course in courses:
        topics_count = db.session.query(func.count(Topic.id)).filter(Topic.course_id == course.id).scalar() or 0
        study_tools_count = db.session.query(func.count(StudyTool.id)).filter(
            StudyTool.course_id == course.id
        ).scalar() or 0
        results.append({
            **course.to_dict(),
            "semester_section": course.semester.section,
            "topics_count": topics_count,
            "study_tools_count": study_tools_count,
            "materials_count": topics_count + study_tools_count
        })

    return jsonify(results), 200


@content_admin_bp.route('/courses', methods=['POST'])
@section_admin_required
def create_course():
    data = _body()
    require_fields(data, "title", "course_code", "semester_id",
                   message="Missing required fields: title, course_code, and semester_id")

    semester = _get_or_404(Semester, data["semester_id"], "Semester")
    check_section_access(g.admin, semester.section, "create courses for semesters in")

    course = Course(
        semester_id=semester.id,
        title=data["title"],
        course_code=data["course_code"],
        teacher_name=data.get("teacher_name"),
        teacher_email=data.get("teacher_email") or None,
        description=data.get("description") or "",
        credits=data.get("credits") or semester.default_credits or 3,
        is_highlighted=bool_or_default(data.get("is_highlighted"), False),
        is_active=bool_or_default(data.get("is_active"))
    )
    db.session.add(course)
    _commit("create course")

    return jsonify({"success": True, "course": course.to_dict(), "message": "Course created successfully"}), 200


@content_admin_bp.route('/courses', methods=['PUT'])
@section_admin_required
def update_course():
    data = _body()
    course = _get_or_404(Course, _id_from_body(data, "Course"), "Course")
    check_section_access(g.admin, course.semester.section, "update courses in")

    apply_updates(course, data, COURSE_FIELDS)
    course.updated_at = db.func.now()
    _commit("update course")

    return jsonify({"success": True, "course": course.to_dict(), "message": "Course updated successfully"}), 200


@content_admin_bp.route('/courses', methods=['DELETE'])
@section_admin_required
def delete_course():
    course = _get_or_404(Course, _id_from_args("Course"), "Course")
    check_section_access(g.admin, course.semester.section, "delete courses in")

    db.session.delete(course)
    _commit("delete course")

    return jsonify({"success": True, "message": "Course deleted successfully"}), 200


#__________________________________________________________________________________________ * Topics *__________________________________________________

@content_admin_bp.route('/topics', methods=['GET'])
@section_admin_required
def list_topics():
    query = Topic.query
    course_id = request.args.get("course_id")
    if course_id:
        query = query.filter(Topic.course_id == course_id)
    topics = _scoped(query, Topic.course, Course.semester).order_by(Topic.order_index.asc()).all()

    return jsonify([topic.to_dict() for topic in topics]), 200


@content_admin_bp.route('/topics', methods=['POST'])
@section_admin_required
def create_topic():
    data = _body()
    require_fields(data, "title", "course_id", message="Missing required fields: title and course_id")

    course = _get_or_404(Course, data["course_id"], "Course")
    check_section_access(g.admin, course.semester.section, "create topics for courses in")

    topic = Topic(
        course_id=course.id,
        title=data["title"],
        description=data.get("description") or "",
        order_index=data.get("order_index") or Topic.get_next_order(course.id),
        is_published=bool_or_default(data.get("is_published"))
    )
    db.session.add(topic)
    _commit("create topic")

    return jsonify({"success": True, "topic": topic.to_dict(), "message": "Topic created successfully"}), 200


@content_admin_bp.route('/topics', methods=['PUT'])
@section_admin_required
def update_topic():
    data = _body()
    topic = _get_or_404(Topic, _id_from_body(data, "Topic"), "Topic")
    check_section_access(g.admin, topic.course.semester.section, "update topics in")

    apply_updates(topic, data, TOPIC_FIELDS)
    topic.updated_at = db.func.now()
    _commit("update topic")

    return jsonify({"success": True, "topic": topic.to_dict(), "message": "Topic updated successfully"}), 200


@content_admin_bp.route('/topics', methods=['DELETE'])
@section_admin_required
def delete_topic():
    topic = _get_or_404(Topic, _id_from_args("Topic"), "Topic")
    check_section_access(g.admin, topic.course.semester.section, "delete topics in")

    db.session.delete(topic)
    _commit("delete topic")

    return jsonify({"success": True, "message": "Topic deleted successfully"}), 200


#__________________________________________________________________________________________ * Slides *__________________________________________________

@content_admin_bp.route('/slides', methods=['GET'])
@section_admin_required
def list_slides():
    query = Slide.query
    topic_id = request.args.get("topic_id")
    if topic_id:
        query = query.filter(Slide.topic_id == topic_id)
    slides = _scoped(query, Slide.topic, Topic.course, Course.semester).order_by(Slide.order_index.asc()).all()

    return jsonify([slide.to_dict() for slide in slides]), 200


@content_admin_bp.route('/slides', methods=['POST'])
@section_admin_required
def create_slide():
    data = _body()
    require_fields(data, "title", "google_drive_url", "topic_id",
                   message="Missing required fields: title, google_drive_url, and topic_id")
    if not is_google_drive_url(data["google_drive_url"]):
        raise ValidationError("Invalid Google Drive URL")

    topic = _get_or_404(Topic, data["topic_id"], "Topic")
    check_section_access(g.admin, topic.course.semester.section, "create slides for topics in")

    slide = Slide(
        topic_id=topic.id,
        title=data["title"],
        google_drive_url=data["google_drive_url"],
        description=data.get("description") or "",
        file_size=data.get("file_size"),
        order_index=data.get("order_index") if data.get("order_index") is not None else Slide.get_next_order(topic.id)
    )
    db.session.add(slide)
    _commit("create slide")

    return jsonify({"success": True, "slide": slide.to_dict(), "message": "Slide created successfully"}), 200


@content_admin_bp.route('/slides', methods=['PUT'])
@section_admin_required
def update_slide():
    data = _body()
    slide = _get_or_404(Slide, _id_from_body(data, "Slide"), "Slide")
    check_section_access(g.admin, slide.topic.course.semester.section, "update slides in")
    if "google_drive_url" in data and not is_google_drive_url(data["google_drive_url"]):
        raise ValidationError("Invalid Google Drive URL")

    apply_updates(slide, data, SLIDE_FIELDS)
    slide.updated_at = db.func.now()
    _commit("update slide")

    return jsonify({"success": True, "slide": slide.to_dict(), "message": "Slide updated successfully"}), 200


@content_admin_bp.route('/slides', methods=['DELETE'])
@section_admin_required
def delete_slide():
    slide = _get_or_404(Slide, _id_from_args("Slide"), "Slide")
    check_section_access(g.admin, slide.topic.course.semester.section, "delete slides in")

    db.session.delete(slide)
    _commit("delete slide")

    return jsonify({"success": True, "message": "Slide deleted successfully"}), 200


#__________________________________________________________________________________________ * Videos *__________________________________________________

@content_admin_bp.route('/videos', methods=['GET'])
@section_admin_required
def list_videos():
    query = Video.query
    topic_id = request.args.get("topic_id")
    if topic_id:
        query = query.filter(Video.topic_id == topic_id)
    videos = _scoped(query, Video.topic, Topic.course, Course.semester).order_by(Video.order_index.asc()).all()

    return jsonify([video.to_dict() for video in videos]), 200


@content_admin_bp.route('/videos', methods=['POST'])
@section_admin_required
def create_video():
    data = _body()
    require_fields(data, "title", "youtube_url", "topic_id",
                   message="Missing required fields: title, youtube_url, and topic_id")
    if not is_youtube_url(data["youtube_url"]):
        raise ValidationError("Invalid YouTube URL")

    topic = _get_or_404(Topic, data["topic_id"], "Topic")
    check_section_access(g.admin, topic.course.semester.section, "create videos for topics in")

    video = Video(
        topic_id=topic.id,
        title=data["title"],
        youtube_url=data["youtube_url"],
        description=data.get("description") or "",
        duration=data.get("duration"),
        order_index=data.get("order_index") if data.get("order_index") is not None else Video.get_next_order(topic.id)
    )
    db.session.add(video)
    _commit("create video")

    return jsonify({"success": True, "video": video.to_dict(), "message": "Video created successfully"}), 200


@content_admin_bp.route('/videos', methods=['PUT'])
@section_admin_required
def update_video():
    data = _body()
    video = _get_or_404(Video, _id_from_body(data, "Video"), "Video")
    check_section_access(g.admin, video.topic.course.semester.section, "update videos in")
    if "youtube_url" in data and not is_youtube_url(data["youtube_url"]):
        raise ValidationError("Invalid YouTube URL")

    apply_updates(video, data, VIDEO_FIELDS)
    video.updated_at = db.func.now()
    _commit("update video")

    return jsonify({"success": True, "video": video.to_dict(), "message": "Video updated successfully"}), 200


@content_admin_bp.route('/videos', methods=['DELETE'])
@section_admin_required
def delete_video():
    video = _get_or_404(Video, _id_from_args("Video"), "Video")
    check_section_access(g.admin, video.topic.course.semester.section, "delete videos in")

    db.session.delete(video)
    _commit("delete video")

    return jsonify({"success": True, "message": "Video deleted successfully"}), 200


#__________________________________________________________________________________________ * Study tools *__________________________________________________

@content_admin_bp.route('/study-tools', methods=['GET'])
@section_admin_required
def list_study_tools():
    query = StudyTool.query
    course_id = request.args.get("course_id")
    tool_type = request.args.get("type")
    if course_id:
        query = query.filter(StudyTool.course_id == course_id)
    if tool_type:
        query = query.filter(StudyTool.type == tool_type)
    tools = _scoped(query, StudyTool.course, Course.semester).order_by(StudyTool.created_at.desc()).all()

    return jsonify([tool.to_dict() for tool in tools]), 200


@content_admin_bp.route('/study-tools', methods=['POST'])
@section_admin_required
def create_study_tool():
    data = _body()
    require_fields(data, "title", "type", "course_id",
                   message="Missing required fields: title, type, and course_id")
    _validate_study_tool(data)

    course = _get_or_404(Course, data["course_id"], "Course")
    check_section_access(g.admin, course.semester.section, "create study tools for courses in")

    tool = StudyTool(
        course_id=course.id,
        title=data["title"],
        type=data["type"],
        content_url=data.get("content_url") or None,
        exam_type=data.get("exam_type") or "both",
        description=data.get("description") or ""
    )
    db.session.add(tool)
    _commit("create study tool")

    return jsonify({"success": True, "study_tool": tool.to_dict(), "message": "Study tool created successfully"}), 200


@content_admin_bp.route('/study-tools', methods=['PUT'])
@section_admin_required
def update_study_tool():
    data = _body()
    tool = _get_or_404(StudyTool, _id_from_body(data, "Study tool"), "Study tool")
    check_section_access(g.admin, tool.course.semester.section, "update study tools in")
    _validate_study_tool(data, partial=True)

    apply_updates(tool, data, STUDY_TOOL_FIELDS)
    tool.updated_at = db.func.now()
    _commit("update study tool")

    return jsonify({"success": True, "study_tool": tool.to_dict(), "message": "Study tool updated successfully"}), 200


@content_admin_bp.route('/study-tools', methods=['DELETE'])
@section_admin_required
def delete_study_tool():
    tool = _get_or_404(StudyTool, _id_from_args("Study tool"), "Study tool")
    check_section_access(g.admin, tool.course.semester.section, "delete study tools in")

    db.session.delete(tool)
    _commit("delete study tool")

    return jsonify({"success": True, "message": "Study tool deleted successfully"}), 200
