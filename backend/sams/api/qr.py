"""QR code API: issue a personal token, resolve a scanned token to a user."""
from flask import Blueprint, current_app
from flask_jwt_extended import jwt_required, current_user
from sams import limiter
from sams.models.user import User
from sams.schemas.qr import TokenVerify
from sams.services.qr_service import QRTokenService
from sams.utils.decorators import staff_required
from sams.utils.helpers import success_response, error_response
from sams.utils.validators import parse_body

qr_bp = Blueprint('qr', __name__)


def get_token_service() -> QRTokenService:
    return current_app.extensions['qr_tokens']


@qr_bp.route('', methods=['GET'])
@jwt_required()
@limiter.limit("30 per minute")
def issue_token():
    """Issue a short-lived token for the current user's QR code."""
    token = get_token_service().issue(current_user.id)
    return success_response(data={'token': token}, message="QR token issued")


@qr_bp.route('/image', methods=['GET'])
@jwt_required()
@limiter.limit("30 per minute")
def issue_token_image():
    """Issue a token together with a rendered PNG of it."""
    service = get_token_service()
    token = service.issue(current_user.id)

    return success_response(
        data={
            'token': token,
            'qr_image': service.render_qr_png(token),
            'expires_in': int(service.lifetime.total_seconds())
        },
        message="QR code generated successfully"
    )


@qr_bp.route('/verify', methods=['POST'])
@jwt_required()
@staff_required
def verify_token():
    """Resolve a scanned token to its user."""
    payload = parse_body(TokenVerify)

    user_id = get_token_service().verify(payload.token)
    if user_id is None:
        current_app.logger.info("Rejected QR token scanned by user %s", current_user.id)
        return error_response("Invalid or expired token", 400)

    user = User.get_by_id(user_id)
    if user is None:
        return error_response("User not found", 404)

    return success_response(data=user.to_dict(), message="QR code is valid")
