# Import all models to ensure they are registered with SQLAlchemy
from .intern import Intern
from .activity import Activity, ActivityCategory

# Make models available at package level
__all__ = ['Intern', 'Activity', 'ActivityCategory']
