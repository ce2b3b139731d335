from datetime import date, datetime, timedelta
from types import SimpleNamespace

from utils.logic import (
    EligibilityPolicy,
    EligibilityResult,
    Statistics,
    calculate_eligibility,
    calculate_stats,
    format_csv,
)

NOW = datetime(2024, 3, 10, 18, 30)
POLICY = EligibilityPolicy(min_active_days=60, min_average_hours=2.5, max_gap_days=3)


def record(day, hours=3):
    if isinstance(day, date):
        day = day.isoformat()
    return {"date": day, "hours": hours}


def run_of_days(end, count, hours=3):
    return [record(end - timedelta(days=offset), hours) for offset in range(count)]


class TestCalculateStats:
    def test_empty_log_is_all_zero(self):
        stats = calculate_stats([], NOW)
        assert stats == Statistics(0, 0.0, 0, 0)

    def test_average_over_distinct_days(self):
        activities = [record("2024-03-01", 2), record("2024-03-02", 4), record("2024-03-05", 3)]
        stats = calculate_stats(activities, NOW)
        assert stats.total_active_days == 3
        assert stats.average_hours == 3.0
        assert stats.total_submissions == 3

    def test_duplicate_day_counts_once_but_hours_add_up(self):
        activities = [record("2024-03-01", 3), record("2024-03-01", 2)]
        stats = calculate_stats(activities, NOW)
        assert stats.total_active_days == 1
        assert stats.average_hours == 5.0
        assert stats.total_submissions == 2

    def test_streak_of_consecutive_days_ending_today(self):
        activities = run_of_days(NOW.date(), 5)
        assert calculate_stats(activities, NOW).current_streak == 5

    def test_streak_ending_yesterday_still_counts(self):
        activities = run_of_days(NOW.date() - timedelta(days=1), 4)
        assert calculate_stats(activities, NOW).current_streak == 4

    def test_streak_is_zero_when_last_log_is_older_than_yesterday(self):
        activities = run_of_days(NOW.date() - timedelta(days=2), 10)
        assert calculate_stats(activities, NOW).current_streak == 0

    def test_gap_stops_the_streak(self):
        today = NOW.date()
        activities = [
            record(today),
            record(today - timedelta(days=1)),
            record(today - timedelta(days=3)),
            record(today - timedelta(days=4)),
        ]
        assert calculate_stats(activities, NOW).current_streak == 2

    def test_unordered_input_and_date_reference(self):
        today = NOW.date()
        activities = [record(today - timedelta(days=2)), record(today), record(today - timedelta(days=1))]
        assert calculate_stats(activities, today).current_streak == 3

    def test_time_of_day_does_not_matter(self):
        activities = [record(NOW.date())]
        late = datetime.combine(NOW.date(), datetime.max.time())
        early = datetime.combine(NOW.date(), datetime.min.time())
        assert calculate_stats(activities, late).current_streak == 1
        assert calculate_stats(activities, early).current_streak == 1

    def test_bad_hours_are_treated_as_zero(self):
        activities = [record("2024-03-01", "abc"), record("2024-03-02", None), record("2024-03-03", float("nan")),
                      record("2024-03-04", "4")]
        stats = calculate_stats(activities, NOW)
        assert stats.average_hours == 1.0

    def test_accepts_objects_with_attributes(self):
        activities = [SimpleNamespace(date=NOW.date().isoformat(), hours=2.5)]
        stats = calculate_stats(activities, NOW)
        assert stats.total_active_days == 1
        assert stats.current_streak == 1

    def test_malformed_date_breaks_streak_without_raising(self):
        today = NOW.date()
        activities = [record(today), {"date": None, "hours": 2}]
        stats = calculate_stats(activities, NOW)
        assert stats.current_streak == 1
        assert stats.total_active_days == 2

    def test_repeated_calls_are_identical(self):
        activities = run_of_days(NOW.date(), 7, hours=2)
        assert calculate_stats(activities, NOW) == calculate_stats(activities, NOW)


class TestCalculateEligibility:
    def test_empty_log_is_never_eligible(self):
        result = calculate_eligibility([], None, POLICY)
        assert result.is_eligible is False
        assert result.active_days == 0
        assert any("60 active days" in reason for reason in result.reasons)

    def test_empty_log_with_zero_thresholds_is_still_not_eligible(self):
        lenient = EligibilityPolicy(min_active_days=0, min_average_hours=0, max_gap_days=3)
        result = calculate_eligibility([], None, lenient)
        assert result.reasons == ()
        assert result.is_eligible is False

    def test_two_day_scenario_fails_only_on_active_days(self):
        activities = [record("2024-01-01", 3), record("2024-01-02", 2)]
        result = calculate_eligibility(activities, "2024-01-01", POLICY)
        assert result.active_days == 2
        assert result.average_hours == 2.5
        assert result.max_gap_days == 0
        assert result.is_eligible is False
        assert result.reasons == ("Requires 60 active days (Current: 2)",)

    def test_sixty_consecutive_days_is_eligible(self):
        activities = run_of_days(date(2024, 3, 1), 60, hours=3)
        result = calculate_eligibility(activities, None, POLICY)
        assert result.is_eligible is True
        assert result.reasons == ()
        assert result.active_days == 60

    def test_max_gap_counts_missed_days(self):
        start = date(2024, 1, 1)
        activities = [record(start), record(start + timedelta(days=1)), record(start + timedelta(days=4))]
        assert calculate_eligibility(activities, None, POLICY).max_gap_days == 2

    def test_unsorted_input_is_sorted_before_measuring_gaps(self):
        activities = [record("2024-01-10"), record("2024-01-01"), record("2024-01-02")]
        assert calculate_eligibility(activities, None, POLICY).max_gap_days == 7

    def test_adjacent_duplicates_do_not_go_negative(self):
        activities = [record("2024-01-01"), record("2024-01-01")]
        result = calculate_eligibility(activities, None, POLICY)
        assert result.max_gap_days == 0
        assert result.active_days == 1

    def test_all_reasons_in_order(self):
        activities = [record("2024-01-01", 1), record("2024-01-10", 2)]
        result = calculate_eligibility(activities, None, POLICY)
        assert result.reasons == (
            "Requires 60 active days (Current: 2)",
            "Average hours must be ≥ 2.5 (Current: 1.5)",
            "Maximum gap exceeded 3 consecutive days (Worst gap: 8 days)",
        )

    def test_gap_equal_to_limit_is_allowed(self):
        activities = run_of_days(date(2024, 3, 1), 60) + [record("2024-03-05")]
        result = calculate_eligibility(activities, None, POLICY)
        assert result.max_gap_days == 3
        assert result.is_eligible is True

    def test_joining_date_does_not_affect_result(self):
        activities = run_of_days(date(2024, 3, 1), 10)
        assert (calculate_eligibility(activities, "2023-01-01", POLICY)
                == calculate_eligibility(activities, None, POLICY))

    def test_default_policy(self):
        activities = run_of_days(date(2024, 3, 1), 60)
        assert calculate_eligibility(activities).is_eligible is True

    def test_malformed_dates_do_not_raise(self):
        activities = [record("2024-01-01"), record("not-a-date"), record(None)]
        result = calculate_eligibility(activities, None, POLICY)
        assert isinstance(result, EligibilityResult)
        assert result.max_gap_days == 0

    def test_to_dict_uses_camel_case(self):
        result = calculate_eligibility([record("2024-01-01")], None, POLICY)
        payload = result.to_dict()
        assert payload["activeDays"] == 1
        assert payload["isEligible"] is False
        assert isinstance(payload["reasons"], list)

    def test_repeated_calls_are_identical(self):
        activities = [record("2024-01-01", 2), record("2024-01-06", 3), record("2024-01-06", 2)]
        first = calculate_eligibility(activities, "2024-01-01", POLICY)
        second = calculate_eligibility(activities, "2024-01-01", POLICY)
        assert first == second
        assert first.to_dict() == second.to_dict()


def test_format_csv_quotes_every_value():
    rows = [{"internId": "CIAL-1", "hours": 3, "description": 'said "hi"'}]
    assert format_csv(rows) == 'internId,hours,description\n"CIAL-1","3","said ""hi"""'


def test_format_csv_empty():
    assert format_csv([]) == ""
