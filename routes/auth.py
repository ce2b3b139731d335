import logging
from flask import (
    Blueprint,
    render_template,
    redirect,
    url_for,
    flash,
    request,
    session,
    current_app,
    jsonify,
)
from flask_login import login_user, logout_user, login_required, current_user
from models.intern import Intern, ROLE_ADMIN, normalize_intern_id
from extensions import db
from forms import LoginForm
from utils import crud_activity, sheet_sync
from utils.helpers import local_today

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint("auth", __name__)

SESSION_DAY_KEY = "login_day"


def _get_or_create_admin():
    admin_id = current_app.config["ADMIN_INTERN_ID"]
    admin = Intern.query.filter_by(intern_id=admin_id).first()
    if admin is None:
        admin = Intern(
            name=current_app.config["ADMIN_NAME"],
            intern_id=admin_id,
            email=f"{admin_id.lower()}@{current_app.config['EMAIL_DOMAIN']}",
            role=ROLE_ADMIN,
        )
        db.session.add(admin)
        db.session.commit()
    elif not admin.is_admin:
        logger.warning(f"Promoting {admin_id} to the admin role")
        admin.role = ROLE_ADMIN
        db.session.commit()
    return admin


@auth_bp.before_app_request
def expire_stale_session():
    """Sessions only last for the calendar day they were opened on."""
    if not current_user.is_authenticated:
        return None
    if session.get(SESSION_DAY_KEY) != local_today().isoformat():
        logout_user()
        session.pop(SESSION_DAY_KEY, None)
        flash("Your session has expired. Please sign in again.", "info")
        return redirect(url_for("auth.login"))
    return None


@auth_bp.route("/")
def home():
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.index"))
    return redirect(url_for("auth.login"))


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.index"))

    form = LoginForm()
    if form.validate_on_submit():
        intern_id = normalize_intern_id(form.intern_id.data)

        if intern_id == current_app.config["ADMIN_INTERN_ID"]:
            user = _get_or_create_admin()
        else:
            try:
                crud_activity.sync_from_sheet()
            except Exception as e:
                db.session.rollback()
                logger.error(f"Sync before login failed: {e}", exc_info=True)
            user = crud_activity.get_intern(intern_id)

        if user:
            login_user(user)
            session[SESSION_DAY_KEY] = local_today().isoformat()
            next_page = request.args.get("next")
            if user.is_admin:
                return redirect(url_for("admin.index"))
            return redirect(next_page or url_for("dashboard.index"))
        flash("Intern ID not found. Check the ID issued by your coordinator.", "danger")

    return render_template("login.html", form=form)


@auth_bp.route("/directory.json")
def directory():
    """Names and IDs for the login picker, admin first."""
    interns = sheet_sync.fetch_all_data()["interns"]
    listing = [{"name": i["name"], "id": i["internId"]} for i in interns]
    admin_id = current_app.config["ADMIN_INTERN_ID"]
    if not any(entry["id"] == admin_id for entry in listing):
        listing.insert(0, {"name": current_app.config["ADMIN_NAME"], "id": admin_id})
    return jsonify(listing)


@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    session.pop(SESSION_DAY_KEY, None)
    return redirect(url_for("auth.login"))
