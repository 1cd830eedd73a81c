from tictactoe.services.games.coordinator import MatchCoordinator


def sweep_idle_rooms(app, coordinator: MatchCoordinator) -> list:
    """One reaper pass; returns the rooms that were expired."""
    with app.app_context():
        expired = coordinator.reap_idle()
    if expired:
        app.logger.info(f"[reaper-sweep] expired={len(expired)} live={len(coordinator.registry)}")
    return expired


def start_idle_reaper(app, socketio, coordinator: MatchCoordinator) -> bool:
    """Start the background sweep that expires idle waiting rooms.

    - No-ops in TESTING mode or when IDLE_ROOM_TIMEOUT_SEC is 0
    - Sweeps every REAPER_INTERVAL_SEC seconds for the life of the process

    Returns True when a task was started.
    """
    if app.config.get('TESTING') or coordinator.idle_timeout <= 0:
        return False

    interval = max(1, int(app.config.get('REAPER_INTERVAL_SEC', 30)))

    def _worker():
        app.logger.info(f"[reaper-start] timeout={coordinator.idle_timeout}s interval={interval}s")
        while True:
            socketio.sleep(interval)
            sweep_idle_rooms(app, coordinator)

    socketio.start_background_task(_worker)
    return True
