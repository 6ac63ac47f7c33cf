from models import db, generate_id
from werkzeug.security import generate_password_hash, check_password_hash
from utils.helpers import format_datetime

SECTION_ADMIN_ROLES = ("section_admin", "admin", "super_admin")


class AdminUser(db.Model):
    __tablename__ = "admin_users"

    id = db.Column(db.String(36), primary_key=True, default=generate_id)
    email = db.Column(db.String(255), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="section_admin")  # 'section_admin', 'admin', 'super_admin'
    department = db.Column(db.String(50), nullable=True)  # section admins store their "63_A" section here
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    last_login = db.Column(db.DateTime, nullable=True)
    login_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    def set_password(self, password):
        """Hashes the password before storing."""
        self.password_hash = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        """Checks if a given password matches the stored hash."""
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<AdminUser {self.email} ({self.role})>"

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "department": self.department,
            "is_active": self.is_active,
            "last_login": format_datetime(self.last_login),
            "created_at": format_datetime(self.created_at),
        }
