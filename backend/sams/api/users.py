"""User management API (admin only)."""
from flask import Blueprint, request
from flask_jwt_extended import jwt_required
from sams.models.user import User, UserRole
from sams.schemas.auth import UserCreate, UserUpdate
from sams.services.auth_service import AuthService
from sams.utils.decorators import admin_required
from sams.utils.exceptions import ValidationError
from sams.utils.helpers import success_response, serialize
from sams.utils.validators import parse_body

users_bp = Blueprint('users', __name__)


@users_bp.route('', methods=['GET'])
@jwt_required()
@admin_required
def list_users():
    """List users, optionally filtered by role."""
    query = User.query

    role = request.args.get('role')
    if role:
        try:
            query = query.filter_by(role=UserRole(role))
        except ValueError:
            raise ValidationError(
                f"Unknown role: {role}",
                details=[{'field': 'role', 'message': 'must be student, lecturer or admin'}]
            )

    return success_response(data=serialize(query.order_by(User.id).all()))


@users_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def create_user():
    payload = parse_body(UserCreate)
    user = AuthService.create_user(payload)
    return success_response(data=user.to_dict(), message="User created", status_code=201)


@users_bp.route('/<int:user_id>', methods=['GET'])
@jwt_required()
@admin_required
def get_user(user_id):
    return success_response(data=User.get_or_404(user_id).to_dict())


@users_bp.route('/<int:user_id>', methods=['PATCH'])
@jwt_required()
@admin_required
def update_user(user_id):
    """Edit role or profile fields of a user."""
    user = User.get_or_404(user_id)
    payload = parse_body(UserUpdate)
    user = AuthService.update_user(user, payload)
    return success_response(data=user.to_dict(), message="User updated")
