"""Custom decorators for authorization."""
from functools import wraps

from flask_jwt_extended import current_user

from sams.models.user import UserRole
from sams.utils.helpers import error_response


def role_required(*roles: UserRole):
    """Require the session user to hold one of ``roles``.

    Must be applied below ``@jwt_required()`` so the user is already loaded.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if current_user is None:
                return error_response("Unauthorized", 401)

            if current_user.role not in roles:
                return error_response("Forbidden", 403)

            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = role_required(UserRole.ADMIN)
staff_required = role_required(UserRole.ADMIN, UserRole.LECTURER)


def can_manage_course(course) -> bool:
    """Admins manage every course, lecturers their own."""
    if current_user.role == UserRole.ADMIN:
        return True
    return course.lecturer_id == current_user.id
