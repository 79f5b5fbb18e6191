"""SAMS - Application Factory."""
import logging
import os
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def create_app(config_name: str = None, token_store=None) -> Flask:
    """Application factory pattern.

    ``token_store`` overrides the QR token store chosen by configuration.
    """
    app = Flask(__name__)

    # Load configuration
    from sams.config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS (credentials for the session cookie)
    CORS(app, origins=app.config.get('CORS_ORIGINS', []), supports_credentials=True)

    setup_logging(app)
    register_session_loaders(app)
    register_qr_tokens(app, token_store)
    register_blueprints(app)
    register_error_handlers(app)
    setup_database(app)
    register_commands(app)

    @app.route('/health')
    def health_check():
        from sams.utils.helpers import success_response
        return success_response(
            data={'service': 'SAMS', 'version': '1.0.0'},
            message='healthy'
        )

    return app


def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from sams.api.auth import auth_bp
    from sams.api.users import users_bp
    from sams.api.courses import courses_bp
    from sams.api.enrollments import enrollments_bp
    from sams.api.sessions import sessions_bp
    from sams.api.attendance import attendance_bp
    from sams.api.qr import qr_bp
    from sams.api.exams import exams_bp
    from sams.api.eligibility import eligibility_bp
    from sams.api.activities import activities_bp
    from sams.api.announcements import announcements_bp
    from sams.api.schedules import events_bp, timetable_bp
    from sams.api.resources import resources_bp
    from sams.api.statistics import stats_bp

    # Auth
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # Admin Management
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(enrollments_bp, url_prefix='/api/enrollments')

    # Core Features
    app.register_blueprint(courses_bp, url_prefix='/api/courses')
    app.register_blueprint(sessions_bp, url_prefix='/api/sessions')
    app.register_blueprint(attendance_bp, url_prefix='/api/attendance')
    app.register_blueprint(qr_bp, url_prefix='/api/qrcode')
    app.register_blueprint(exams_bp, url_prefix='/api/exams')
    app.register_blueprint(eligibility_bp, url_prefix='/api/eligibility')

    # Communication and scheduling
    app.register_blueprint(activities_bp, url_prefix='/api/activities')
    app.register_blueprint(announcements_bp, url_prefix='/api/announcements')
    app.register_blueprint(events_bp, url_prefix='/api/events')
    app.register_blueprint(timetable_bp, url_prefix='/api/timetable')
    app.register_blueprint(resources_bp, url_prefix='/api/resources')
    app.register_blueprint(stats_bp, url_prefix='/api/stats')


def register_qr_tokens(app: Flask, token_store=None) -> None:
    """Attach the QR token service owned by this app instance."""
    from sams.services.auth_service import AuthService
    from sams.services.qr_service import QRTokenService, create_token_store

    store = token_store if token_store is not None else create_token_store(app)
    app.extensions['qr_tokens'] = QRTokenService(
        store=store,
        user_exists=AuthService.user_exists,
        lifetime=app.config['QR_TOKEN_LIFETIME']
    )


def register_session_loaders(app: Flask) -> None:
    """Resolve the session cookie to a user and shape auth failures."""
    from sams.models.user import User
    from sams.utils.helpers import error_response

    @jwt.user_identity_loader
    def user_identity_lookup(user_id):
        return str(user_id)

    @jwt.user_lookup_loader
    def user_lookup_callback(jwt_header, jwt_data):
        user = db.session.get(User, int(jwt_data['sub']))
        if user is None or not user.is_active:
            return None
        return user

    @jwt.user_lookup_error_loader
    def user_lookup_error_callback(jwt_header, jwt_data):
        return error_response('User not found', 401)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response('Session has expired', 401)

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return error_response('Invalid session', 401)

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return error_response('Unauthorized', 401)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from sams.utils.helpers import handle_error
    from sams.utils.exceptions import SamsError
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(SamsError)
    def handle_sams_error(e):
        return handle_error(e, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return handle_error(e, e.code)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        db.session.rollback()
        app.logger.exception('Unhandled error: %s', e)
        return handle_error('Internal server error', 500)


def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)
    logging.getLogger('sams').setLevel(level)

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        logging.getLogger('sams').addHandler(file_handler)

        app.logger.setLevel(level)
        app.logger.info('SAMS startup')


def setup_database(app: Flask) -> None:
    """Import all models so their tables are registered."""
    with app.app_context():
        from sams.models import (  # noqa: F401
            User, Course, Enrollment, ClassSession, Attendance,
            Exam, ExamEligibility, ExamAttendance, Activity,
            Announcement, AnnouncementRecipient, Event, TimetableEntry, Resource
        )


def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command('seed-db')
    def seed_db():
        """Seed database with sample users and a course."""
        from sams.services.seed_service import SeedService

        SeedService.seed_all()
        click.echo('Database seeded successfully!')
        click.echo('Sample logins: admin / lecturer / student, password "password"')

    @app.cli.command('create-admin')
    def create_admin():
        """Create admin user."""
        from sams.models.user import UserRole
        from sams.schemas.auth import UserCreate
        from sams.services.auth_service import AuthService

        payload = UserCreate(
            username=click.prompt('Admin username'),
            first_name=click.prompt('First name'),
            last_name=click.prompt('Last name'),
            email=click.prompt('Email'),
            password=click.prompt('Password', hide_input=True, confirmation_prompt=True),
            role=UserRole.ADMIN
        )
        user = AuthService.create_user(payload)
        click.echo(f'Admin user created: {user.username}')
