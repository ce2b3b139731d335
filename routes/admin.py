from datetime import datetime
from flask import Blueprint, render_template, jsonify, current_app, Response, abort
from config import Config
from utils import crud_activity
from utils.helpers import admin_required
from utils.logic import calculate_stats, calculate_eligibility, format_csv

# Create blueprint
admin_bp = Blueprint('admin', __name__)

EXPORT_COLUMNS = ['internId', 'date', 'hours', 'category', 'description', 'qualityScore', 'proofLink']


def _intern_report(intern, activities, policy, now):
    stats = calculate_stats(activities, now)
    eligibility = calculate_eligibility(activities, intern.joining_date, policy)
    return {
        'intern': intern,
        'stats': stats,
        'eligibility': eligibility,
        'last_log': activities[0].date if activities else None,
    }


@admin_bp.route('/')
@admin_required
def index():
    policy = Config.build_policy(current_app.config)
    now = datetime.now()

    by_intern = {}
    for activity in crud_activity.get_activities():
        by_intern.setdefault(activity.intern_id, []).append(activity)

    reports = [
        _intern_report(intern, by_intern.get(intern.intern_id, []), policy, now)
        for intern in crud_activity.list_interns()
    ]
    eligible_count = sum(1 for r in reports if r['eligibility'].is_eligible)

    return render_template(
        'admin.html',
        reports=reports,
        policy=policy,
        eligible_count=eligible_count,
        total_submissions=sum(len(v) for v in by_intern.values()),
    )


@admin_bp.route('/interns/<intern_id>.json')
@admin_required
def intern_detail(intern_id):
    intern = crud_activity.get_intern(intern_id)
    if intern is None:
        abort(404)
    activities = crud_activity.get_activities(intern.intern_id)
    report = _intern_report(intern, activities, Config.build_policy(current_app.config), datetime.now())
    return jsonify({
        'intern': intern.to_dict(),
        'stats': report['stats'].to_dict(),
        'eligibility': report['eligibility'].to_dict(),
        'activities': [a.to_dict() for a in activities],
    })


@admin_bp.route('/export.csv')
@admin_required
def export_csv():
    rows = []
    for activity in crud_activity.get_activities():
        record = activity.to_dict()
        rows.append({column: record.get(column) for column in EXPORT_COLUMNS})
    return Response(
        format_csv(rows),
        mimetype='text/csv',
        headers={'Content-Disposition': 'attachment; filename=intern_activities.csv'},
    )
