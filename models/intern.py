from datetime import datetime
from flask_login import UserMixin
from extensions import db

ROLE_INTERN = 'intern'
ROLE_ADMIN = 'admin'


def normalize_intern_id(value):
    """Intern IDs are compared trimmed and upper-cased."""
    return str(value or '').strip().upper()


class Intern(UserMixin, db.Model):
    __tablename__ = 'interns'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    intern_id = db.Column(db.String(64), nullable=False, unique=True, index=True)
    email = db.Column(db.String(200), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=ROLE_INTERN)
    status = db.Column(db.String(50), default='Active')
    joining_date = db.Column(db.String(10))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __init__(self, name, intern_id, email, role=ROLE_INTERN, status='Active', joining_date=None):
        self.name = name
        self.intern_id = normalize_intern_id(intern_id)
        self.email = email
        self.role = role
        self.status = status
        self.joining_date = joining_date

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def to_dict(self):
        return {
            'name': self.name,
            'internId': self.intern_id,
            'email': self.email,
            'role': self.role,
            'status': self.status,
            'joiningDate': self.joining_date,
        }

    def __repr__(self):
        return f'<Intern {self.intern_id}>'
