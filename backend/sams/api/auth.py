"""Authentication API: cookie-carried session login, logout and current user."""
from flask import Blueprint, current_app
from flask_jwt_extended import (
    jwt_required, current_user, create_access_token,
    set_access_cookies, unset_jwt_cookies
)
from sams import limiter
from sams.schemas.auth import LoginRequest
from sams.services.auth_service import AuthService
from sams.utils.helpers import success_response, error_response
from sams.utils.validators import parse_body

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
def login():
    """Log in with username and password and start a session."""
    payload = parse_body(LoginRequest)

    user, error = AuthService.login(payload.username, payload.password)

    if error:
        return error_response(error, 401)

    access_token = create_access_token(identity=user.id)

    response, status = success_response(
        data={
            "user": user.to_dict(),
            "access_token": access_token
        },
        message="Login successful"
    )
    set_access_cookies(response, access_token)
    return response, status


@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    """End the session."""
    AuthService.logout(current_user.id)
    current_app.logger.info("User %s logged out", current_user.username)

    response, status = success_response(message="Logged out successfully")
    unset_jwt_cookies(response)
    return response, status


@auth_bp.route("/user", methods=["GET"])
@jwt_required()
def get_current_user():
    """Get current user profile."""
    return success_response(data=current_user.to_dict())
