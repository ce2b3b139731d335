import base64
from datetime import date, datetime
from functools import wraps
from flask import request, redirect, url_for, flash, jsonify
from flask_login import current_user


def login_required_api(f):
    """API route decorator to require authentication."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({
                'status': 'error',
                'message': 'Authentication required',
                'redirect': url_for('auth.login')
            }), 401
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Route decorator to require admin privileges."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            flash('Please log in to access this page.', 'warning')
            return redirect(url_for('auth.login', next=request.url))

        if not current_user.is_admin:
            flash('You do not have permission to access this page.', 'danger')
            return redirect(url_for('dashboard.index'))

        return f(*args, **kwargs)
    return decorated_function


def local_today():
    """Today's calendar date on the server clock."""
    return datetime.now().date()


def format_day(value, format='long'):
    """Jinja2 filter to format YYYY-MM-DD strings."""
    if not value:
        return ""
    try:
        day = value if isinstance(value, date) else date.fromisoformat(str(value)[:10])
    except ValueError:
        return str(value)

    if format == 'long':
        return day.strftime("%B %d, %Y")
    elif format == 'weekday':
        return day.strftime("%A, %B %d")
    elif format == 'short':
        return day.strftime("%b %d")
    return day.isoformat()


def file_to_data_url(file):
    """Encode an uploaded image as a ``data:`` URL so it can travel in one field."""
    if not file or not getattr(file, 'filename', ''):
        return None
    payload = base64.b64encode(file.read()).decode('ascii')
    mimetype = file.mimetype or 'application/octet-stream'
    return f"data:{mimetype};base64,{payload}"


def is_image_proof(value):
    return bool(value) and str(value).startswith('data:image/')


def is_safe_link(value):
    """True for http(s) URLs and inline image proofs; anything else is not linked."""
    if not value:
        return False
    link = str(value).strip().lower()
    return link.startswith(('http://', 'https://')) or is_image_proof(link)
