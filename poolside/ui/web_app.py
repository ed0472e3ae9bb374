"""
Web application module for the Poolside Stat Tracker.

This module contains the Flask web server that provides JSON API endpoints
for the live tracker, roster and player management, game scheduling and
the post-game summary.
"""
import logging
from collections import OrderedDict
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from ..config import DEFAULT_MAX_TRACKERS, AppConfig
from ..models import ApiResult, ErrorKind, EventType, ShotOutcome, SituationContext
from ..services.game_service import GameValidationError
from ..services.live_tracker import LiveTracker, TrackerInputError, TrackerLoadError
from ..services.player_service import PlayerService, PlayerValidationError
from ..services.roster_service import RosterValidationError
from ..services.service_factory import ServiceFactory

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Trackers are created lazily per game. At most ``max_trackers`` are kept;
    opening another game evicts the least recently used one, which reloads
    from the store on its next request. A roster change or the end of a game
    drops that game's tracker.
    """

    def __init__(self, factory: ServiceFactory, max_trackers: int = DEFAULT_MAX_TRACKERS):
        self.factory = factory
        self.roster_service = factory.create_roster_service()
        self.player_service = factory.create_player_service()
        self.game_service = factory.create_game_service()
        self.max_trackers = max_trackers
        self.trackers: "OrderedDict[int, LiveTracker]" = OrderedDict()

    def tracker(self, game_id: int) -> LiveTracker:
        """
        Get the tracker for ``game_id``, loading it on first use.

        Raises:
            TrackerLoadError: If the game data cannot be fetched
        """
        tracker = self.trackers.get(game_id)
        if tracker is not None:
            self.trackers.move_to_end(game_id)
            return tracker

        tracker = self.factory.create_live_tracker(game_id)
        self.trackers[game_id] = tracker
        logger.info("Loaded tracker for game %s", game_id)
        while len(self.trackers) > self.max_trackers:
            evicted, _ = self.trackers.popitem(last=False)
            logger.info("Evicted tracker for game %s", evicted)
        return tracker

    def drop_tracker(self, game_id: int) -> None:
        self.trackers.pop(game_id, None)


def _body() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _require(data: Dict[str, Any], key: str) -> Any:
    if data.get(key) is None:
        raise TrackerInputError(f"'{key}' is required")
    return data[key]


def _optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    return None if value is None else int(value)


def _result_response(result: ApiResult, **extra: Any):
    """Map a store result to JSON; dropped triggers are not errors."""
    body = result.to_dict()
    body.update(extra)
    if result.ok or result.error is ErrorKind.IGNORED:
        return jsonify(body)
    return jsonify(body), 400


def create_app(config: Optional[AppConfig] = None, factory: Optional[ServiceFactory] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        config: Runtime settings (read from the environment when omitted)
        factory: Service factory (built from ``config`` when omitted)

    Returns:
        Configured Flask application instance
    """
    config = config or AppConfig.from_env()
    app_state = WebAppState(factory or ServiceFactory(config), config.max_trackers)

    app = Flask(__name__)
    app.config["APP_STATE"] = app_state

    # ==================== Error mapping ==================== #

    @app.errorhandler(TrackerLoadError)
    def handle_load_error(e):
        return jsonify({"success": False, "error": str(e)}), 404

    @app.errorhandler(RosterValidationError)
    @app.errorhandler(PlayerValidationError)
    @app.errorhandler(GameValidationError)
    def handle_validation_error(e):
        return jsonify({"success": False, "error": str(e)}), 400

    # TrackerInputError and InvalidTransition are ValueErrors; so are bad enum values
    @app.errorhandler(ValueError)
    def handle_bad_input(e):
        return jsonify({"success": False, "error": str(e)}), 400

    def _view(game_id: int):
        return jsonify({"success": True, "tracker": app_state.tracker(game_id).to_view()})

    def _tracker_result(game_id: int, result: Optional[ApiResult]):
        tracker = app_state.tracker(game_id)
        if result is None:
            return jsonify({"success": True, "tracker": tracker.to_view()})
        return _result_response(result, tracker=tracker.to_view())

    # ==================== Tracker: entry context ==================== #

    @app.route("/api/games/<int:game_id>/tracker", methods=["GET"])
    def get_tracker(game_id: int):
        """Get the full tracker view for a game."""
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/player", methods=["POST"])
    def select_player(game_id: int):
        app_state.tracker(game_id).select_player(int(_require(_body(), "playerId")))
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/clock", methods=["POST"])
    def set_clock(game_id: int):
        data = _body()
        app_state.tracker(game_id).set_clock(_optional_int(data, "minutes"), _optional_int(data, "seconds"))
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/clock/preset", methods=["POST"])
    def apply_clock_preset(game_id: int):
        app_state.tracker(game_id).apply_clock_preset(int(_require(_body(), "minutes")))
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/period", methods=["POST"])
    def set_period(game_id: int):
        app_state.tracker(game_id).set_period(int(_require(_body(), "period")))
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/situation", methods=["POST"])
    def set_situation(game_id: int):
        situation = SituationContext.parse(_body().get("situation"))
        app_state.tracker(game_id).set_situation(situation)
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/tab", methods=["POST"])
    def set_tab(game_id: int):
        app_state.tracker(game_id).set_tab(str(_require(_body(), "tab")))
        return _view(game_id)

    # ==================== Tracker: stat events ==================== #

    @app.route("/api/games/<int:game_id>/tracker/events", methods=["POST"])
    def press_event(game_id: int):
        """Record (or, in edit mode, update) an event for the selected player."""
        tracker = app_state.tracker(game_id)
        event_type = EventType(_require(_body(), "type"))
        result = tracker.press_event(event_type)
        if event_type.is_shot and tracker.state.wizard_open:
            return jsonify({"success": True, "shotWizard": True, "tracker": tracker.to_view()})
        return _result_response(result, tracker=tracker.to_view())

    @app.route("/api/games/<int:game_id>/tracker/events/<int:event_id>/edit", methods=["POST"])
    def edit_event(game_id: int, event_id: int):
        app_state.tracker(game_id).edit_event(event_id)
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/edit/cancel", methods=["POST"])
    def cancel_edit(game_id: int):
        app_state.tracker(game_id).cancel_edit()
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/undo", methods=["POST"])
    def undo(game_id: int):
        return _tracker_result(game_id, app_state.tracker(game_id).undo())

    @app.route("/api/games/<int:game_id>/tracker/events/<int:event_id>", methods=["DELETE"])
    def delete_event(game_id: int, event_id: int):
        return _tracker_result(game_id, app_state.tracker(game_id).delete_event(event_id))

    # ==================== Tracker: shot wizard ==================== #

    @app.route("/api/games/<int:game_id>/tracker/shot/pool", methods=["POST"])
    def shot_pool(game_id: int):
        data = _body()
        app_state.tracker(game_id).shot_tap_pool(float(_require(data, "x")), float(_require(data, "y")))
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/shot/goal", methods=["POST"])
    def shot_goal(game_id: int):
        data = _body()
        app_state.tracker(game_id).shot_tap_goal(float(_require(data, "x")), float(_require(data, "y")))
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/shot/next", methods=["POST"])
    def shot_next(game_id: int):
        app_state.tracker(game_id).shot_next()
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/shot/back", methods=["POST"])
    def shot_back(game_id: int):
        app_state.tracker(game_id).shot_back()
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/shot/outcome", methods=["POST"])
    def shot_outcome(game_id: int):
        outcome = ShotOutcome(_require(_body(), "outcome"))
        return _tracker_result(game_id, app_state.tracker(game_id).shot_outcome(outcome))

    @app.route("/api/games/<int:game_id>/tracker/shot/assist", methods=["POST"])
    def shot_assist(game_id: int):
        assister_id = _optional_int(_body(), "assisterId")
        return _tracker_result(game_id, app_state.tracker(game_id).shot_assist(assister_id))

    @app.route("/api/games/<int:game_id>/tracker/shot/cancel", methods=["POST"])
    def shot_cancel(game_id: int):
        app_state.tracker(game_id).shot_cancel()
        return _view(game_id)

    # ==================== Tracker: substitutions ==================== #

    @app.route("/api/games/<int:game_id>/tracker/bench/<int:player_id>", methods=["POST"])
    def press_bench_player(game_id: int, player_id: int):
        app_state.tracker(game_id).press_bench_player(player_id)
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/water/<int:player_id>", methods=["POST"])
    def press_in_water_player(game_id: int, player_id: int):
        app_state.tracker(game_id).press_in_water_player(player_id)
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/substitution", methods=["POST"])
    def confirm_substitution(game_id: int):
        return _tracker_result(game_id, app_state.tracker(game_id).confirm_substitution())

    @app.route("/api/games/<int:game_id>/tracker/substitution/cancel", methods=["POST"])
    def cancel_substitution(game_id: int):
        app_state.tracker(game_id).cancel_substitution()
        return _view(game_id)

    @app.route("/api/games/<int:game_id>/tracker/lineup", methods=["POST"])
    def save_lineup(game_id: int):
        return _tracker_result(game_id, app_state.tracker(game_id).save_lineup())

    @app.route("/api/games/<int:game_id>/tracker/refresh", methods=["POST"])
    def refresh(game_id: int):
        return _tracker_result(game_id, app_state.tracker(game_id).refresh())

    # ==================== Roster and presets ==================== #

    def _roster_payload(game_id: int):
        result = app_state.roster_service.get_roster(game_id)
        if not result.ok:
            return _result_response(result)
        players = app_state.player_service.list_players()
        if not players.ok:
            return _result_response(players)
        goalkeepers, field_players = app_state.roster_service.split_goalkeepers(result.value)
        return jsonify({
            "success": True,
            "goalkeepers": [r.to_dict() for r in goalkeepers],
            "fieldPlayers": [r.to_dict() for r in field_players],
            "availableCaps": app_state.roster_service.available_cap_numbers(result.value),
            "availablePlayers": [
                p.to_dict() for p in PlayerService.available_players(players.value, result.value)
            ],
        })

    @app.route("/api/games/<int:game_id>/roster", methods=["GET"])
    def get_roster(game_id: int):
        """Get the roster split into goalkeepers and field players."""
        return _roster_payload(game_id)

    @app.route("/api/games/<int:game_id>/roster", methods=["POST"])
    def add_roster_player(game_id: int):
        """Add a player to the roster with a cap number."""
        data = _body()
        current = app_state.roster_service.get_roster(game_id)
        if not current.ok:
            return _result_response(current)
        result = app_state.roster_service.add_player(
            game_id, _optional_int(data, "playerId"), _optional_int(data, "capNumber"), current.value
        )
        if not result.ok:
            return _result_response(result)
        app_state.drop_tracker(game_id)
        return _roster_payload(game_id)

    @app.route("/api/games/<int:game_id>/roster/<int:roster_id>", methods=["DELETE"])
    def remove_roster_player(game_id: int, roster_id: int):
        result = app_state.roster_service.remove_player(game_id, roster_id)
        if not result.ok:
            return _result_response(result)
        app_state.drop_tracker(game_id)
        return _roster_payload(game_id)

    @app.route("/api/games/<int:game_id>/roster/preset/<int:preset_id>", methods=["POST"])
    def load_preset(game_id: int, preset_id: int):
        """Add a saved preset's players to the game roster."""
        current = app_state.roster_service.get_roster(game_id)
        if not current.ok:
            return _result_response(current)
        result = app_state.roster_service.load_preset(game_id, preset_id, current.value)
        app_state.drop_tracker(game_id)
        if not result.ok:
            return _result_response(result)
        return _roster_payload(game_id)

    @app.route("/api/presets", methods=["GET"])
    def list_presets():
        result = app_state.roster_service.list_presets()
        if not result.ok:
            return _result_response(result)
        return jsonify({"success": True, "presets": [p.to_dict() for p in result.value]})

    @app.route("/api/presets", methods=["POST"])
    def save_preset():
        """Save a game's current roster as a named preset."""
        data = _body()
        game_id = int(_require(data, "gameId"))
        current = app_state.roster_service.get_roster(game_id)
        if not current.ok:
            return _result_response(current)
        result = app_state.roster_service.save_preset(str(data.get("name") or ""), current.value)
        return _result_response(result)

    @app.route("/api/presets/<int:preset_id>", methods=["DELETE"])
    def delete_preset(preset_id: int):
        return _result_response(app_state.roster_service.delete_preset(preset_id))

    # ==================== Players ==================== #

    @app.route("/api/players", methods=["GET"])
    def list_players():
        result = app_state.player_service.list_players()
        if not result.ok:
            return _result_response(result)
        return jsonify({"success": True, "players": [p.to_dict() for p in result.value]})

    @app.route("/api/players", methods=["POST"])
    def create_player():
        """Register a new player."""
        data = _body()
        result = app_state.player_service.create_player(
            data.get("firstName"), data.get("lastName"), data.get("position")
        )
        if not result.ok:
            return _result_response(result)
        return jsonify({"success": True, "player": result.value.to_dict() if result.value else None})

    @app.route("/api/players/<int:player_id>", methods=["DELETE"])
    def delete_player(player_id: int):
        return _result_response(app_state.player_service.delete_player(player_id))

    # ==================== Games ==================== #

    @app.route("/api/games", methods=["GET"])
    def list_games():
        result = app_state.game_service.list_games()
        if not result.ok:
            return _result_response(result)
        return jsonify({"success": True, "games": [g.to_dict() for g in result.value]})

    @app.route("/api/games", methods=["POST"])
    def create_game():
        """Schedule a new game."""
        data = _body()
        result = app_state.game_service.create_game(
            data.get("opponent"), data.get("date"), data.get("location"), data.get("homeOrAway")
        )
        if not result.ok:
            return _result_response(result)
        return jsonify({"success": True, "game": result.value.to_dict() if result.value else None})

    @app.route("/api/games/<int:game_id>", methods=["DELETE"])
    def delete_game(game_id: int):
        result = app_state.game_service.delete_game(game_id)
        if result.ok:
            app_state.drop_tracker(game_id)
        return _result_response(result)

    @app.route("/api/games/<int:game_id>/start", methods=["POST"])
    def start_game(game_id: int):
        return _result_response(app_state.game_service.start_game(game_id))

    @app.route("/api/games/<int:game_id>/end", methods=["POST"])
    def end_game(game_id: int):
        result = app_state.game_service.end_game(game_id)
        if result.ok:
            app_state.drop_tracker(game_id)
        return _result_response(result)

    @app.route("/api/games/<int:game_id>/summary", methods=["GET"])
    def game_summary(game_id: int):
        """Post-game summary: event log, substitutions and playing time."""
        result = app_state.game_service.build_summary(game_id)
        if not result.ok:
            return _result_response(result)
        return jsonify({"success": True, "summary": result.value.to_dict()})

    return app


def run_web_app(config: Optional[AppConfig] = None) -> None:
    """
    Run the web application.

    Remote calls block the request handler, so the server runs a single
    thread and handlers never overlap.

    Args:
        config: Runtime settings (read from the environment when omitted)
    """
    config = config or AppConfig.from_env()
    app = create_app(config)
    logger.info("Serving on http://%s:%s (API %s)", config.host, config.port, config.api_url)
    app.run(host=config.host, port=config.port, debug=False, threaded=False)
