import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from ai_services.quality_scorer import score_description
from extensions import db
from models.activity import Activity, ActivityCategory
from models.intern import Intern, ROLE_INTERN, normalize_intern_id
from utils import sheet_sync

logger = logging.getLogger(__name__)

DUPLICATE_SUBMISSION_MESSAGE = "A record for today already exists."


class DuplicateSubmissionError(ValueError):
    """Raised when an intern already has a record for the given day."""


def _day_str(day) -> str:
    return day.isoformat() if isinstance(day, date) else str(day)[:10]


def get_activities(intern_id: Optional[str] = None) -> List[Activity]:
    """Activities newest first, for one intern or for everyone."""
    query = Activity.query
    if intern_id:
        query = query.filter_by(intern_id=normalize_intern_id(intern_id))
    return query.order_by(Activity.date.desc(), Activity.id.desc()).all()


def get_intern(intern_id: str) -> Optional[Intern]:
    return Intern.query.filter_by(intern_id=normalize_intern_id(intern_id)).first()


def list_interns() -> List[Intern]:
    return Intern.query.filter_by(role=ROLE_INTERN).order_by(Intern.name).all()


def has_submitted(intern_id: str, day) -> bool:
    return Activity.query.filter_by(
        intern_id=normalize_intern_id(intern_id), date=_day_str(day)
    ).first() is not None


def merge_interns(records: Iterable[Dict]) -> int:
    """Upsert interns by ID. Returns the number of newly created rows."""
    created = 0
    admin_id = normalize_intern_id(current_app.config["ADMIN_INTERN_ID"])
    for record in records:
        intern_id = normalize_intern_id(record.get("internId"))
        if not intern_id:
            continue
        if intern_id == admin_id:
            # The admin account is owned by the login flow
            logger.warning(f"Ignoring sheet row for admin ID {intern_id}")
            continue
        intern = get_intern(intern_id)
        if intern is None:
            intern = Intern(
                name=record.get("name") or intern_id,
                intern_id=intern_id,
                email=record.get("email") or "",
                status=record.get("status") or "Active",
                joining_date=record.get("joiningDate"),
            )
            db.session.add(intern)
            created += 1
        elif not intern.is_admin:
            intern.name = record.get("name") or intern.name
            intern.email = record.get("email") or intern.email
            intern.status = record.get("status") or intern.status
            intern.joining_date = record.get("joiningDate") or intern.joining_date
    db.session.commit()
    return created


def merge_activities(records: Iterable[Dict]) -> int:
    """Upsert activity records keyed by ``(internId, date)``.

    A record that matches an existing day replaces its fields instead of
    adding a second row, so merging the same batch twice changes nothing.
    Returns the number of newly created rows.
    """
    created = 0
    seen: Dict[tuple, Activity] = {}
    for record in records:
        intern_id = normalize_intern_id(record.get("internId"))
        day = _day_str(record.get("date") or "")
        if not intern_id or not day:
            logger.warning(f"Skipping activity without intern or date: {record!r}")
            continue

        key = (intern_id, day)
        activity = seen.get(key) or Activity.query.filter_by(intern_id=intern_id, date=day).first()
        if activity is None:
            activity = Activity(
                intern_id=intern_id,
                date=day,
                hours=record.get("hours") or 0,
                description=record.get("description") or "",
                category=record.get("category") or ActivityCategory.OTHER.value,
                quality_score=record.get("qualityScore"),
                proof_link=record.get("proofLink") or None,
            )
            db.session.add(activity)
            created += 1
        else:
            activity.hours = record.get("hours") or 0
            activity.description = record.get("description") or activity.description
            activity.category = record.get("category") or activity.category
            activity.quality_score = record.get("qualityScore", activity.quality_score)
            activity.proof_link = record.get("proofLink") or activity.proof_link
        seen[key] = activity

    db.session.commit()
    return created


def sync_from_sheet(use_cache: bool = True) -> Dict[str, int]:
    """Pull interns and activities from the sheet into the database."""
    data = sheet_sync.fetch_all_data(use_cache=use_cache)
    new_interns = merge_interns(data["interns"])
    new_activities = merge_activities(data["activities"])
    logger.info(f"Merged {new_interns} new interns and {new_activities} new activities")
    return {"interns": new_interns, "activities": new_activities}


def submit_activity(
    intern_id: str,
    day,
    hours: float,
    category: str,
    description: str,
    proof_link: Optional[str] = None,
    scorer: Callable[[str], float] = score_description,
) -> Activity:
    """Store today's activity for an intern.

    Raises:
        DuplicateSubmissionError: a record already exists for that day
    """
    intern_id = normalize_intern_id(intern_id)
    day = _day_str(day)

    if has_submitted(intern_id, day):
        logger.info(f"Rejected duplicate submission for {intern_id} on {day}")
        raise DuplicateSubmissionError(DUPLICATE_SUBMISSION_MESSAGE)

    activity = Activity(
        intern_id=intern_id,
        date=day,
        hours=hours,
        description=description,
        category=category,
        quality_score=scorer(description),
        proof_link=proof_link or None,
    )
    db.session.add(activity)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise DuplicateSubmissionError(DUPLICATE_SUBMISSION_MESSAGE) from e

    sheet_sync.push_activity(activity.to_dict())
    return activity
