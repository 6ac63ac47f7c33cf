from flask import Blueprint, request, jsonify, g

from classes.content_cache import get_content_cache
from classes.semester_manager import SemesterManager
from utils.utils import section_admin_required

section_admin_bp = Blueprint('section_admin', __name__)


#__________________________________________________________________________________________ * Semesters *__________________________________________________

@section_admin_bp.route('/semesters', methods=['GET'])
@section_admin_required
def list_semesters():
    semesters = SemesterManager.list_semesters(g.admin)
    return jsonify({"semesters": semesters}), 200


@section_admin_bp.route('/semesters', methods=['POST'])
@section_admin_required
def create_semester():
    semester = SemesterManager.create_semester(request.get_json(silent=True), g.admin)
    get_content_cache().clear()

    return jsonify({
        "success": True,
        "semester": semester.to_dict(),
        "message": "Semester created successfully"
    }), 200


# Semester with its full course/topic/slide/video/study-tool tree
@section_admin_bp.route('/semesters/<semester_id>', methods=['GET'])
@section_admin_required
def get_semester(semester_id):
    return jsonify(SemesterManager.get_semester_tree(semester_id, g.admin)), 200


@section_admin_bp.route('/semesters/<semester_id>', methods=['PUT'])
@section_admin_required
def update_semester(semester_id):
    semester = SemesterManager.update_semester(semester_id, request.get_json(silent=True), g.admin)
    get_content_cache().clear()

    return jsonify({
        "success": True,
        "semester": semester.to_dict(),
        "message": "Semester and courses updated successfully"
    }), 200


@section_admin_bp.route('/semesters/<semester_id>', methods=['DELETE'])
@section_admin_required
def delete_semester(semester_id):
    title = SemesterManager.delete_semester(semester_id, g.admin)
    get_content_cache().clear()

    return jsonify({
        "success": True,
        "message": f'Semester "{title}" deleted successfully'
    }), 200
