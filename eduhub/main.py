import logging

from fastapi import FastAPI

from eduhub.config import settings
from eduhub.errors import register_exception_handlers
from eduhub.extensions import db

log = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(create_tables: bool = False) -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
    register_exception_handlers(app)

    # Routers
    from eduhub.routers.auth.routes import router as auth_router
    from eduhub.routers.teacher.routes import router as teacher_router
    from eduhub.routers.attendance.routes import router as attendance_router
    from eduhub.routers.assignments.routes import router as assignments_router
    from eduhub.routers.gradebook.routes import router as gradebook_router
    from eduhub.routers.students.routes import router as students_router
    from eduhub.routers.messages.routes import router as messages_router
    from eduhub.routers.users.routes import router as users_router
    from eduhub.routers.admin.routes import router as admin_router

    app.include_router(auth_router)
    app.include_router(teacher_router)
    app.include_router(attendance_router)
    app.include_router(assignments_router)
    app.include_router(gradebook_router)
    app.include_router(students_router)
    app.include_router(messages_router)
    app.include_router(users_router)
    app.include_router(admin_router)

    if create_tables:
        # Importing the models registers every table on the metadata
        import eduhub.models  # noqa: F401

        db.create_all()
        log.info("Database tables created at %s", settings.SQLALCHEMY_DATABASE_URI)

    return app


app = create_app()
