from __future__ import annotations

from classes.content_writers import ContentLeafWriter, StudyResourceWriter, TopicWriter
from classes.course_replacer import CourseReplacer
from models import db
from models.courses import Course
from models.semesters import Semester
from models.topics import Topic


def _semester(**overrides):
    semester = Semester(title="Fall 2025", section="63_A", **overrides)
    db.session.add(semester)
    db.session.flush()
    return semester


def test_leaf_writer_falls_back_to_generic_url(app):
    slides = ContentLeafWriter.build_slides([
        {"title": "A", "url": "https://drive.google.com/a"},
        {"title": "B", "google_drive_url": "https://drive.google.com/b", "url": "ignored", "order_index": 7},
    ])
    videos = ContentLeafWriter.build_videos([{"title": "V", "url": "https://youtu.be/v"}])

    assert [slide.google_drive_url for slide in slides] == ["https://drive.google.com/a", "https://drive.google.com/b"]
    assert [slide.order_index for slide in slides] == [0, 7]
    assert slides[0].description == ""
    assert videos[0].youtube_url == "https://youtu.be/v"


def test_explicit_zero_order_index_is_kept(app):
    slides = ContentLeafWriter.build_slides([{"title": "A"}, {"title": "B", "order_index": 0}])

    assert [slide.order_index for slide in slides] == [0, 0]


def test_study_resource_placeholders_become_null(app):
    assert StudyResourceWriter.content_url({"content_url": "text"}) is None
    assert StudyResourceWriter.content_url({"content_url": "file", "url": "https://x"}) is None
    assert StudyResourceWriter.content_url({"content_url": "https://a"}) == "https://a"
    assert StudyResourceWriter.content_url({"url": "https://b"}) == "https://b"
    assert StudyResourceWriter.content_url({}) is None


def test_study_resources_accept_both_keys(app):
    assert StudyResourceWriter.resources_for({"study_resources": [{"title": "a"}]}) == [{"title": "a"}]
    assert StudyResourceWriter.resources_for({"studyTools": [{"title": "b"}]}) == [{"title": "b"}]
    assert StudyResourceWriter.resources_for({}) == []


def test_topic_writer_attaches_children_to_their_own_topic(app):
    semester = _semester()
    course = Course(title="Networks")
    semester.courses.append(course)

    TopicWriter.write(course, [
        {"title": "Layers", "slides": [{"title": "L1"}, {"title": "L2"}]},
        {"title": "Routing", "videos": [{"title": "R1"}], "order_index": 5},
    ])
    db.session.flush()

    topics = Topic.query.filter_by(course_id=course.id).order_by(Topic.order_index).all()
    assert [(topic.title, topic.order_index) for topic in topics] == [("Layers", 0), ("Routing", 5)]
    assert [slide.title for slide in topics[0].slides] == ["L1", "L2"]
    assert topics[0].videos == []
    assert [video.title for video in topics[1].videos] == ["R1"]


def test_replace_uses_semester_default_credits(app):
    semester = _semester(default_credits=4)

    courses = CourseReplacer.replace(semester, [
        {"title": "One", "course_code": "C1"},
        {"title": "Two", "course_code": "C2", "credits": 1, "teacher_email": ""},
    ])

    assert [course.credits for course in courses] == [4, 1]
    assert courses[1].teacher_email is None
    assert all(course.semester_id == semester.id for course in courses)


def test_replace_removes_previous_courses(app):
    semester = _semester()
    CourseReplacer.replace(semester, [{"title": "Old", "topics": [{"title": "T"}]}])
    db.session.commit()

    CourseReplacer.replace(semester, [{"title": "New"}])
    db.session.commit()

    assert [course.title for course in Course.query.all()] == ["New"]
    assert Topic.query.count() == 0


def test_replace_does_not_commit(app):
    semester = _semester()
    CourseReplacer.replace(semester, [{"title": "Pending"}])

    db.session.rollback()

    assert Course.query.count() == 0
    assert Semester.query.count() == 0
