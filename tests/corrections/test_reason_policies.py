from datetime import datetime

from src.shift_tracker.shift_tracker.corrections.strategies.flat_length import FlatLengthReasonPolicy
from src.shift_tracker.shift_tracker.corrections.strategies.templated import TemplatedReasonPolicy


def test_flat_policy_measures_trimmed_text():
    policy = FlatLengthReasonPolicy()

    assert policy.template(manager="Dana", now=datetime(2026, 2, 2, 10, 0)) == ""
    assert policy.check("   ") == "Correction reason is required for audit trail."
    assert policy.check("  too short  ") == "Correction reason must be at least 10 characters."
    assert policy.check("Forgot to clock out") is None


def test_flat_policy_custom_length():
    assert FlatLengthReasonPolicy(min_length=3).check("abc") is None


def test_templated_policy_prefills_manager_and_time():
    policy = TemplatedReasonPolicy()
    text = policy.template(manager="Dana", now=datetime(2026, 2, 2, 10, 5))

    assert text == "Manager Name: Dana\nDate/Time: 2026-02-02 10:05\nReason: "


def test_templated_policy_only_counts_text_after_marker():
    policy = TemplatedReasonPolicy()
    template = policy.template(manager="A very long manager name", now=datetime(2026, 2, 2, 10, 5))

    assert policy.extract(template) == ""
    assert policy.check(template) == (
        "Please provide a reason for the time correction after 'Reason:' (minimum 3 characters)."
    )
    assert policy.check(template + "Sick") is None


def test_templated_policy_falls_back_to_non_template_lines():
    policy = TemplatedReasonPolicy()
    text = "Manager Name: Dana\nDate/Time: 2026-02-02 10:05\nBadge reader was down"

    assert policy.extract(text) == "Badge reader was down"
    assert policy.check(text) is None
    assert policy.check("Manager: Dana | 2026-02-02 10:05\n") is not None


def test_templated_policy_requires_something():
    assert TemplatedReasonPolicy().check("") == "Correction reason is required for audit trail."


def test_templated_policy_skips_indented_template_lines():
    policy = TemplatedReasonPolicy()
    text = "Badge reader was down\n  Manager Name: Dana\n\tDate/Time: 2026-02-02 10:05"

    assert policy.extract(text) == "Badge reader was down"
    assert policy.check("Manager Name: Dana\n   Date/Time: 2026-02-02 10:05\n") is not None
