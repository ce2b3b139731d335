import logging
from flask import Blueprint, redirect, url_for, flash, jsonify
from flask_login import login_required, current_user
from extensions import db
from forms import ActivityForm
from utils import crud_activity
from utils.crud_activity import DuplicateSubmissionError
from utils.helpers import local_today, file_to_data_url, login_required_api

logger = logging.getLogger(__name__)

# Create blueprint
activity_bp = Blueprint('activity', __name__)


@activity_bp.route('/submit', methods=['POST'])
@login_required
def submit():
    if current_user.is_admin:
        flash('Admins do not log activities.', 'warning')
        return redirect(url_for('admin.index'))

    form = ActivityForm()
    if not form.validate_on_submit():
        for errors in form.errors.values():
            for error in errors:
                flash(error, 'danger')
        return redirect(url_for('dashboard.index'))

    proof_link = file_to_data_url(form.proof_image.data) or (form.proof_url.data or '').strip()

    try:
        crud_activity.submit_activity(
            intern_id=current_user.intern_id,
            day=local_today(),
            hours=form.hours.data,
            category=form.category.data,
            description=form.description.data.strip(),
            proof_link=proof_link,
        )
    except DuplicateSubmissionError as e:
        flash(str(e), 'warning')
        return redirect(url_for('dashboard.index'))
    except Exception as e:
        db.session.rollback()
        logger.error(f"Failed to store activity for {current_user.intern_id}: {e}", exc_info=True)
        flash('Failed to submit activity.', 'danger')
        return redirect(url_for('dashboard.index'))

    flash('Activity logged for today. Great work!', 'success')
    return redirect(url_for('dashboard.index'))


@activity_bp.route('/sync', methods=['POST'])
@login_required
def sync():
    try:
        result = crud_activity.sync_from_sheet(use_cache=False)
    except Exception as e:
        db.session.rollback()
        logger.error(f"Manual sync failed: {e}", exc_info=True)
        flash('Cloud sync failed. Showing saved records.', 'danger')
    else:
        flash(f"Synced {result['activities']} new records.", 'info')
    return redirect(url_for('dashboard.index'))


@activity_bp.route('/history.json')
@login_required_api
def history():
    activities = crud_activity.get_activities(current_user.intern_id)
    return jsonify([a.to_dict() for a in activities])
