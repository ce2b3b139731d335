import enum
from datetime import datetime
from extensions import db
from models.intern import normalize_intern_id


class ActivityCategory(str, enum.Enum):
    LEARNING = 'Learning'
    DEVELOPMENT = 'Development'
    RESEARCH = 'Research'
    DOCUMENTATION = 'Documentation'
    MEETING = 'Meeting'
    OTHER = 'Other'

    @classmethod
    def choices(cls):
        return [(c.value, c.value) for c in cls]


class Activity(db.Model):
    """One logged work day for an intern."""
    __tablename__ = 'activities'
    __table_args__ = (
        db.UniqueConstraint('intern_id', 'date', name='uq_activity_intern_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    intern_id = db.Column(db.String(64), nullable=False, index=True)
    # Kept as the YYYY-MM-DD string the sheet delivers
    date = db.Column(db.String(10), nullable=False, index=True)
    hours = db.Column(db.Float, nullable=False, default=0.0)
    category = db.Column(db.String(50), default=ActivityCategory.LEARNING.value)
    description = db.Column(db.Text, nullable=False, default='')
    quality_score = db.Column(db.Float)
    proof_link = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __init__(self, intern_id, date, hours, description, category=ActivityCategory.LEARNING.value,
                 quality_score=None, proof_link=None):
        self.intern_id = normalize_intern_id(intern_id)
        self.date = date
        self.hours = hours
        self.description = description
        self.category = category
        self.quality_score = quality_score
        self.proof_link = proof_link

    def to_dict(self):
        return {
            'id': f'act-{self.id}',
            'internId': self.intern_id,
            'date': self.date,
            'hours': self.hours,
            'category': self.category,
            'description': self.description,
            'qualityScore': self.quality_score,
            'proofLink': self.proof_link,
            'timestamp': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Activity {self.intern_id} {self.date}>'
