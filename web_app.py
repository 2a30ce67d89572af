# web_app.py
from flask import Flask, current_app, jsonify, request

from config import load_settings, open_store
from habit_manager import HabitTracker
from journal_bp import journal_bp
from reports import today_entry, today_gratitude
from reports_bp import reports_bp


# ---------------- Flask ---------------- #
def create_app(overrides=None, tracker=None):
    """
    Build the local single-user app. `tracker` lets tests inject a
    HabitTracker with a fixed clock; otherwise one is opened on the
    configured store.
    """
    app = Flask(__name__)
    settings = load_settings(overrides)
    app.config.update(settings)
    app.secret_key = settings["SECRET_KEY"]

    if tracker is None:
        tracker = HabitTracker(open_store(settings))
    app.extensions["habit_tracker"] = tracker

    app.register_blueprint(journal_bp)
    app.register_blueprint(reports_bp)
    _register_routes(app)
    return app


# ---------------- Helpers ---------------- #
def _tracker():
    return current_app.extensions["habit_tracker"]


def _payload():
    """JSON object body or form fields; anything else is treated as empty."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _result(success, message, **extra):
    body = {"success": success, "message": message}
    body.update(extra)
    return jsonify(body)


def _habit_rows(tracker):
    today = tracker.today()
    rows = []
    for habit in tracker.state.habits:
        row = habit.to_dict()
        entry = today_entry(tracker.state.habit_entries, habit.id, today)
        row["todayMinutes"] = entry.minutes if entry else None
        rows.append(row)
    return rows


# ---------------- Routes ---------------- #
def _register_routes(app):

    @app.route('/', endpoint='today')
    def today_view():
        """Today: habits with what has been logged today, plus today's gratitude."""
        tracker = _tracker()
        with tracker.lock:
            gratitude = today_gratitude(tracker.state.gratitude_entries, tracker.today())
            return jsonify({
                "habits": _habit_rows(tracker),
                "todayGratitude": gratitude.to_dict() if gratitude else None,
                "prompt": tracker.current_prompt(),
                "isPremium": tracker.state.is_premium,
            })

    @app.route('/api/habits', methods=['GET'])
    def list_habits():
        tracker = _tracker()
        with tracker.lock:
            return jsonify(_habit_rows(tracker))

    @app.route('/api/habits', methods=['POST'])
    def create_habit():
        data = _payload()
        tracker = _tracker()
        with tracker.lock:
            success, message = tracker.add_habit(data.get("name"))
            habit = tracker.state.habits[-1].to_dict() if success else None
        return _result(success, message, habit=habit)

    @app.route('/api/habits/move', methods=['POST'])
    def move_habit():
        data = _payload()
        try:
            index = int(data.get("index"))
        except (TypeError, ValueError):
            return _result(False, "Index must be a whole number.")

        tracker = _tracker()
        with tracker.lock:
            success, message = tracker.move_habit(index, data.get("direction"))
            return _result(success, message, habits=_habit_rows(tracker))

    @app.route('/api/habits/<habit_id>', methods=['PUT'])
    def rename_habit(habit_id):
        data = _payload()
        success, message = _tracker().rename_habit(habit_id, data.get("name"))
        return _result(success, message)

    @app.route('/api/habits/<habit_id>', methods=['DELETE'])
    def delete_habit(habit_id):
        tracker = _tracker()
        with tracker.lock:
            success, message = tracker.delete_habit(habit_id)
            return _result(success, message, habits=_habit_rows(tracker))

    @app.route('/api/habits/<habit_id>/log', methods=['POST'])
    def log_minutes(habit_id):
        data = _payload()
        success, message = _tracker().log_habit_minutes(habit_id, data.get("minutes"))
        return _result(success, message)

    @app.route('/api/premium', methods=['GET'])
    def get_premium():
        tracker = _tracker()
        with tracker.lock:
            return jsonify({"isPremium": tracker.state.is_premium})

    @app.route('/api/premium', methods=['POST'])
    def update_premium():
        """Toggle, or set explicitly when the body carries `enabled`."""
        data = _payload()
        tracker = _tracker()
        with tracker.lock:
            if "enabled" in data:
                success, message = tracker.set_premium(data["enabled"] in (True, "true", "1", 1))
            else:
                success, message = tracker.toggle_premium()
            return _result(success, message, isPremium=tracker.state.is_premium)


app = create_app()

if __name__ == '__main__':
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=False)
