from flask import Blueprint, jsonify

from models import db
from models.semesters import Semester
from models.courses import Course
from models.topics import Topic
from models.slides import Slide
from models.videos import Video
from models.study_tools import StudyTool
from classes.content_cache import get_content_cache
from classes.errors import NotFoundError, ValidationError
from classes.validators import validate_batch
from utils.helpers import format_datetime

# Read-only endpoints for students browsing the portal; no login required.
public_bp = Blueprint('public', __name__)


def _active_semesters():
    return Semester.query.filter_by(is_active=True).order_by(Semester.created_at.desc()).all()


def _semester_summary(semester):
    return {
        "id": semester.id,
        "title": semester.title,
        "section": semester.section,
        "is_active": semester.is_active,
        "description": semester.description or "",
    }


def _breadcrumb(course):
    """Course and semester context shown above a single content item."""
    if course is None:
        return None
    semester = course.semester
    return {
        "id": course.id,
        "title": course.title,
        "courseCode": course.course_code,
        "teacherName": course.teacher_name,
        "semester": {
            "id": semester.id,
            "title": semester.title,
            "section": semester.section,
            "name": semester.title,
        } if semester else None,
    }


def _metadata(kind, item_id, title, description, course, topic, embed_url):
    course_title = course.title if course else None
    return {
        "title": f"{title} - {course_title}" if course_title else title,
        "description": description or f"View {title} {kind}" + (f" from {course_title} course" if course_title else ""),
        "courseTitle": course_title,
        "topicTitle": topic.title if topic else None,
        "semesterTitle": course.semester.title if course and course.semester else None,
        "teacherName": course.teacher_name if course else None,
        "shareUrl": f"/{kind.rstrip('s').replace(' ', '-')}/{item_id}",
        "embedUrl": embed_url,
    }


def _topic_content(slide_or_video, kind, url):
    topic = slide_or_video.topic
    course = topic.course if topic else None
    return {
        "id": slide_or_video.id,
        "title": slide_or_video.title,
        "url": url,
        "description": slide_or_video.description or "",
        "type": kind,
        "orderIndex": slide_or_video.order_index,
        "createdAt": format_datetime(slide_or_video.created_at),
        "updatedAt": format_datetime(slide_or_video.updated_at),
        "topic": {
            "id": topic.id,
            "title": topic.title,
            "course": _breadcrumb(course),
        } if topic else None,
        "metadata": _metadata(f"{kind}s", slide_or_video.id, slide_or_video.title,
                              slide_or_video.description, course, topic, url),
    }


#__________________________________________________________________________________________ * Semesters *__________________________________________________

@public_bp.route('/semesters/public', methods=['GET'])
def public_semesters():
    semesters = get_content_cache().get_or_compute(
        "semesters:public",
        lambda: [_semester_summary(semester) for semester in _active_semesters()]
    )
    return jsonify(semesters), 200


@public_bp.route('/semesters/by-batch/<batch>', methods=['GET'])
def semesters_by_batch(batch):
    if not validate_batch(batch):
        raise ValidationError("Invalid batch number. Must be a numeric value.")

    def load():
        # section is "{batch}_{letter}"
        semesters = [
            semester for semester in _active_semesters()
            if semester.section and semester.batch == batch
        ]
        semesters.sort(key=lambda semester: semester.section)
        return [
            {
                **_semester_summary(semester),
                "created_at": format_datetime(semester.created_at),
                "updated_at": format_datetime(semester.updated_at),
            }
            for semester in semesters
        ]

    semesters = get_content_cache().get_or_compute(f"semesters:batch:{batch}", load)
    return jsonify({"batch": batch, "semesters": semesters, "count": len(semesters)}), 200


@public_bp.route('/batches', methods=['GET'])
def list_batches():
    def load():
        batches = {}
        for semester in _active_semesters():
            if not semester.section:
                continue
            batch, _, letter = semester.section.partition("_")
            if not batch:
                continue
            entry = batches.setdefault(batch, {"batch": batch, "sections": [], "sampleTitle": semester.title or ""})
            if letter and letter not in entry["sections"]:
                entry["sections"].append(letter)

        ordered = sorted(batches.values(), key=lambda entry: int(entry["batch"]) if entry["batch"].isdigit() else -1,
                         reverse=True)
        return [
            {**entry, "sections": sorted(entry["sections"]), "displayName": f"Batch {entry['batch']}"}
            for entry in ordered
        ]

    return jsonify(get_content_cache().get_or_compute("batches", load)), 200


#__________________________________________________________________________________________ * Course content *__________________________________________________

@public_bp.route('/courses/<course_id>/topics', methods=['GET'])
def course_topics(course_id):
    def load():
        topics = Topic.query.filter_by(course_id=course_id).order_by(Topic.order_index.asc()).all()
        return [topic.to_dict(nested=True) for topic in topics]

    return jsonify(get_content_cache().get_or_compute(f"course:{course_id}:topics", load)), 200


@public_bp.route('/courses/<course_id>/study-tools', methods=['GET'])
def course_study_tools(course_id):
    def load():
        course = db.session.get(Course, course_id)
        if not course:
            return None
        return [tool.to_dict() for tool in course.study_tools]

    tools = get_content_cache().get_or_compute(f"course:{course_id}:study-tools", load)
    if tools is None:
        raise NotFoundError("Course not found")
    return jsonify(tools), 200


@public_bp.route('/slides/<slide_id>', methods=['GET'])
def get_slide(slide_id):
    def load():
        slide = db.session.get(Slide, slide_id)
        if not slide:
            return None
        data = _topic_content(slide, "slide", slide.google_drive_url)
        data["fileSize"] = slide.file_size
        return data

    slide = get_content_cache().get_or_compute(f"slide:{slide_id}", load)
    if slide is None:
        raise NotFoundError("Slide not found")
    return jsonify(slide), 200


@public_bp.route('/videos/<video_id>', methods=['GET'])
def get_video(video_id):
    def load():
        video = db.session.get(Video, video_id)
        if not video:
            return None
        data = _topic_content(video, "video", video.youtube_url)
        data["duration"] = video.duration
        return data

    video = get_content_cache().get_or_compute(f"video:{video_id}", load)
    if video is None:
        raise NotFoundError("Video not found")
    return jsonify(video), 200


@public_bp.route('/study-tools/<tool_id>', methods=['GET'])
def get_study_tool(tool_id):
    def load():
        tool = db.session.get(StudyTool, tool_id)
        if not tool:
            return None
        return {
            **tool.to_dict(),
            "course": _breadcrumb(tool.course),
            "metadata": _metadata("study-tools", tool.id, tool.title, tool.description,
                                  tool.course, None, tool.content_url),
        }

    tool = get_content_cache().get_or_compute(f"study-tool:{tool_id}", load)
    if tool is None:
        raise NotFoundError("Study tool not found")
    return jsonify(tool), 200
