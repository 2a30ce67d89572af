# reports_bp.py
from flask import Blueprint, current_app, jsonify

from calendar_utils import PERIODS, format_date, period_bounds
from insights import ai_evaluation
from reports import habit_history, recent_gratitude, report_for, year_end_report

reports_bp = Blueprint("reports", __name__)


def _tracker():
    """Local lookup (avoid import cycles with web_app)."""
    return current_app.extensions["habit_tracker"]


@reports_bp.route("/reports/year-end", methods=["GET"])
def year_end():
    tracker = _tracker()
    with tracker.lock:
        state = tracker.state
        return jsonify(year_end_report(state.habits, state.habit_entries, tracker.clock()))


@reports_bp.route("/reports/insights", methods=["GET"])
def insights_page():
    """AI insights are a premium view; free users get an empty list."""
    tracker = _tracker()
    with tracker.lock:
        if not tracker.state.is_premium:
            return jsonify({"premium": False, "insights": []})
        return jsonify({"premium": True, "insights": ai_evaluation(tracker.state, tracker.clock())})


@reports_bp.route("/reports/<period>", methods=["GET"])
def period_report(period):
    """Week / month / year totals per habit, in importance order."""
    if period not in PERIODS:
        return jsonify({"error": f"Unknown period '{period}'"}), 404

    tracker = _tracker()
    now = tracker.clock()
    start, end = period_bounds(period, now)
    with tracker.lock:
        stats = report_for(period, tracker.state.habits, tracker.state.habit_entries, now)
    return jsonify({
        "period": period,
        "start": format_date(start),
        "end": format_date(end),
        "stats": [s.to_dict() for s in stats],
    })


@reports_bp.route("/history", methods=["GET"])
def history_page():
    tracker = _tracker()
    with tracker.lock:
        state = tracker.state
        return jsonify({
            "habits": habit_history(state.habits, state.habit_entries),
            "gratitude": [e.to_dict() for e in recent_gratitude(state.gratitude_entries)],
        })
