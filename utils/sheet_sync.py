"""Spreadsheet endpoint client.

The endpoint is an Apps Script web app that answers GET with
``{"interns": [...], "activities": [...]}`` and accepts new activity
records as a JSON POST body.
"""
import copy
import json
import logging
import re
from typing import Dict, List, Optional

import requests
from flask import current_app

from ai_services.quality_scorer import DEFAULT_QUALITY_SCORE
from extensions import cache
from models.intern import normalize_intern_id
from utils.mock_data import MOCK_INTERNS, INITIAL_ACTIVITIES

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = "PASTE_YOUR_URL_HERE"
CACHE_KEY = "sheet_sync:all_data"


class SheetSyncError(Exception):
    """Raised when the spreadsheet endpoint cannot be read."""


def sheet_url() -> str:
    return (current_app.config.get("SHEET_API_URL") or "").strip()


def is_mock_mode(url: Optional[str]) -> bool:
    url = (url or "").strip()
    return not url or PLACEHOLDER_URL in url


def _normalize_key(key) -> str:
    return re.sub(r"[^a-z0-9]", "", str(key).lower())


def get_value_by_fuzzy_key(row: Dict, target: str):
    """Find a value whose column header loosely matches ``target``.

    Sheet tables come back with headers such as "Intern ID " or
    "Student Name (Full)", so headers are compared lower-cased with
    everything but letters and digits removed, by substring.
    """
    wanted = _normalize_key(target)
    for key, value in row.items():
        if wanted in _normalize_key(key):
            return value
    return None


def normalize_interns(raw_interns: List[Dict]) -> List[Dict]:
    """Map sheet rows to intern dicts, keeping only active interns with an ID."""
    domain = current_app.config["EMAIL_DOMAIN"]
    joining_date = current_app.config["DEFAULT_JOINING_DATE"]

    interns = []
    for row in raw_interns or []:
        if not isinstance(row, dict):
            continue
        name = (get_value_by_fuzzy_key(row, "Student Name")
                or get_value_by_fuzzy_key(row, "Full Name")
                or row.get("name"))
        raw_id = get_value_by_fuzzy_key(row, "Intern ID") or get_value_by_fuzzy_key(row, "ID")
        status = get_value_by_fuzzy_key(row, "Status") or "Active"

        intern_id = normalize_intern_id(raw_id)
        name = str(name).strip() if name else ""
        status = str(status).strip()

        status_key = status.lower()
        if not name or not intern_id:
            continue
        if "active" not in status_key or "inactive" in status_key:
            continue

        interns.append({
            "name": name,
            "internId": intern_id,
            "email": f"{intern_id.lower()}@{domain}",
            "status": status,
            "joiningDate": joining_date,
        })
    return interns


def _to_float(value, default):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if number == number else default


def normalize_activities(raw_activities: List[Dict]) -> List[Dict]:
    activities = []
    for row in raw_activities or []:
        if not isinstance(row, dict):
            continue
        record = dict(row)
        record["internId"] = normalize_intern_id(row.get("internId"))
        # Sheets serialise date cells as full timestamps
        record["date"] = str(row.get("date") or "")[:10]
        record["hours"] = _to_float(row.get("hours") or 0, 0.0)
        record["qualityScore"] = _to_float(row.get("qualityScore") or DEFAULT_QUALITY_SCORE,
                                           DEFAULT_QUALITY_SCORE)
        activities.append(record)
    return activities


def _mock_data() -> Dict[str, List[Dict]]:
    return {
        "interns": copy.deepcopy(MOCK_INTERNS),
        "activities": copy.deepcopy(INITIAL_ACTIVITIES),
    }


def _fetch_remote(url: str) -> Dict[str, List[Dict]]:
    timeout = current_app.config.get("SHEET_TIMEOUT", 10)
    try:
        response = requests.get(url, headers={"Cache-Control": "no-store"}, timeout=timeout)
    except requests.RequestException as e:
        raise SheetSyncError(f"Cloud connection failed: {e}") from e

    if not response.ok:
        raise SheetSyncError(f"Cloud connection failed: {response.status_code}")

    try:
        payload = response.json()
    except ValueError as e:
        raise SheetSyncError("Spreadsheet endpoint returned invalid JSON") from e

    if not isinstance(payload, dict):
        raise SheetSyncError("Spreadsheet endpoint returned an unexpected payload")
    if payload.get("error"):
        raise SheetSyncError(f"The spreadsheet script encountered an error: {payload['error']}")

    interns = normalize_interns(payload.get("interns") or [])
    activities = normalize_activities(payload.get("activities") or [])
    logger.info(f"Synced {len(interns)} interns and {len(activities)} logs from sheet")
    return {"interns": interns, "activities": activities}


def fetch_all_data(use_cache: bool = True) -> Dict[str, List[Dict]]:
    """Return ``{"interns": [...], "activities": [...]}`` from the sheet.

    Falls back to the bundled mock data when no endpoint is configured or
    the endpoint fails, so the app stays usable offline.
    """
    url = sheet_url()
    if is_mock_mode(url):
        return _mock_data()

    if use_cache:
        cached = cache.get(CACHE_KEY)
        if cached is not None:
            return copy.deepcopy(cached)

    try:
        data = _fetch_remote(url)
    except SheetSyncError as e:
        logger.error(f"Sheet sync failed, using mock data: {e}")
        return _mock_data()

    cache.set(CACHE_KEY, data, timeout=current_app.config.get("SHEET_CACHE_TIMEOUT", 60))
    return copy.deepcopy(data)


def invalidate_cache():
    cache.delete(CACHE_KEY)


def push_activity(record: Dict) -> bool:
    """Send a new activity to the sheet. Failures are logged, not raised."""
    url = sheet_url()
    if is_mock_mode(url):
        return False

    try:
        response = requests.post(
            url,
            headers={"Content-Type": "text/plain"},
            data=json.dumps(record),
            timeout=current_app.config.get("SHEET_TIMEOUT", 10),
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Cloud push failed for {record.get('internId')} {record.get('date')}: {e}")
        return False

    invalidate_cache()
    return True
