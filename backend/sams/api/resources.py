"""Learning resource API endpoints."""
from flask import Blueprint, request
from flask_jwt_extended import jwt_required, current_user
from sqlalchemy import or_, select
from sams.models.course import Course, Enrollment
from sams.models.resource import Resource
from sams.schemas.content import ResourceCreate
from sams.utils.helpers import success_response, serialize, query_int
from sams.utils.validators import parse_body

resources_bp = Blueprint('resources', __name__)


@resources_bp.route('', methods=['GET'])
@jwt_required()
def list_resources():
    """Newest resources first.

    Students only see public resources and those of their enrolled courses.
    """
    query = Resource.query

    course_id = query_int('courseId', 'course_id')
    uploader_id = query_int('uploaderId', 'uploader_id')
    resource_type = request.args.get('type')

    if course_id is not None:
        query = query.filter(Resource.course_id == course_id)
    if uploader_id is not None:
        query = query.filter(Resource.uploaded_by_id == uploader_id)
    if resource_type:
        query = query.filter(Resource.type == resource_type)

    if current_user.is_student():
        enrolled = select(Enrollment.course_id).where(Enrollment.student_id == current_user.id)
        query = query.filter(or_(Resource.is_public.is_(True), Resource.course_id.in_(enrolled)))

    resources = query.order_by(Resource.uploaded_at.desc(), Resource.id.desc()).all()
    return success_response(data=serialize(resources))


@resources_bp.route('', methods=['POST'])
@jwt_required()
def create_resource():
    """Share a resource; anyone signed in may upload."""
    payload = parse_body(ResourceCreate)

    if payload.course_id is not None:
        Course.get_or_404(payload.course_id)

    resource = Resource(uploaded_by_id=current_user.id, **payload.model_dump()).save()
    return success_response(data=resource.to_dict(), message="Resource shared", status_code=201)
