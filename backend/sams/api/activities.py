"""Activity log API."""
from flask import Blueprint, current_app
from flask_jwt_extended import jwt_required
from sams.models.activity import Activity
from sams.utils.helpers import success_response, serialize, query_int

activities_bp = Blueprint('activities', __name__)


@activities_bp.route('', methods=['GET'])
@jwt_required()
def list_activities():
    """Newest activities first, for everyone or one user."""
    query = Activity.query.order_by(Activity.timestamp.desc(), Activity.id.desc())

    user_id = query_int('userId', 'user_id')
    if user_id is not None:
        return success_response(data=serialize(query.filter_by(user_id=user_id).all()))

    limit = query_int('limit') or current_app.config['DEFAULT_ACTIVITY_LIMIT']
    limit = max(1, min(limit, current_app.config['MAX_ACTIVITY_LIMIT']))

    return success_response(data=serialize(query.limit(limit).all()))
