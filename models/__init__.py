import sqlite3
import uuid

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Initialize SQLAlchemy
db = SQLAlchemy()


def generate_id():
    """Primary keys are UUID strings so an id is never handed out twice."""
    return str(uuid.uuid4())


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Import models
from models.admin_users import AdminUser

from models.semesters import Semester
from models.courses import Course
from models.topics import Topic
from models.slides import Slide
from models.videos import Video
from models.study_tools import StudyTool
