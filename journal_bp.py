# journal_bp.py
from flask import Blueprint, current_app, jsonify, request

from reports import recent_gratitude, today_gratitude

journal_bp = Blueprint("journal", __name__)

RECENT_ENTRIES = 5


def _tracker():
    """Local lookup to avoid importing from web_app (no circular imports)."""
    return current_app.extensions["habit_tracker"]


@journal_bp.route("/journal", methods=["GET"])
def journal_page():
    """
    Gratitude journal.
    Shows today's prompt (or today's saved entry) and the last few entries.
    """
    tracker = _tracker()
    with tracker.lock:
        entry = today_gratitude(tracker.state.gratitude_entries, tracker.today())
        return jsonify({
            "prompt": tracker.current_prompt(),
            "todayEntry": entry.to_dict() if entry else None,
            "recent": [e.to_dict() for e in recent_gratitude(tracker.state.gratitude_entries, RECENT_ENTRIES)],
        })


@journal_bp.route("/journal", methods=["POST"])
def save_entry():
    # Support both form-POST and JSON POST (from fetch/AJAX)
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    text = request.form.get("text") or payload.get("text") or ""
    tracker = _tracker()
    with tracker.lock:
        prompt = request.form.get("prompt") or payload.get("prompt") or tracker.current_prompt()
        success, message = tracker.save_gratitude(text, prompt)
        entry = today_gratitude(tracker.state.gratitude_entries, tracker.today()) if success else None
        return jsonify({
            "success": success,
            "message": message,
            "entry": entry.to_dict() if entry else None,
        })


@journal_bp.route("/journal/history", methods=["GET"])
def journal_history():
    tracker = _tracker()
    with tracker.lock:
        return jsonify([e.to_dict() for e in recent_gratitude(tracker.state.gratitude_entries)])
