from datetime import datetime
from flask import Blueprint, render_template, jsonify, current_app, redirect, url_for
from flask_login import login_required, current_user

from config import Config
from forms import ActivityForm
from utils import crud_activity
from utils.helpers import local_today, login_required_api
from utils.logic import calculate_stats, calculate_eligibility

# Create blueprint
dashboard_bp = Blueprint('dashboard', __name__)


def build_progress(intern):
    """Statistics and eligibility for one intern, as of now."""
    activities = crud_activity.get_activities(intern.intern_id)
    policy = Config.build_policy(current_app.config)
    stats = calculate_stats(activities, datetime.now())
    eligibility = calculate_eligibility(activities, intern.joining_date, policy)
    return activities, stats, eligibility, policy


@dashboard_bp.route('/dashboard')
@login_required
def index():
    if current_user.is_admin:
        return redirect(url_for('admin.index'))

    activities, stats, eligibility, policy = build_progress(current_user)
    today = local_today()
    submitted_today = any(a.date == today.isoformat() for a in activities)
    first_log_date = activities[-1].date if activities else None

    return render_template(
        'dashboard.html',
        activities=activities,
        stats=stats,
        eligibility=eligibility,
        policy=policy,
        today=today,
        submitted_today=submitted_today,
        first_log_date=first_log_date,
        form=None if submitted_today else ActivityForm(),
    )


@dashboard_bp.route('/api/stats')
@login_required_api
def stats_api():
    _, stats, eligibility, policy = build_progress(current_user)
    return jsonify({
        'internId': current_user.intern_id,
        'stats': stats.to_dict(),
        'eligibility': eligibility.to_dict(),
        'policy': {
            'minActiveDays': policy.min_active_days,
            'minAverageHours': policy.min_average_hours,
            'maxGapDays': policy.max_gap_days,
        },
    })
