import threading
from typing import Callable

from arcade import socketio


Cancel = Callable[[], None]


def start_timer(app, duration: float, on_expire: Callable[[], None]) -> Cancel:
    """Run on_expire after duration seconds unless the returned cancel() is called first.

    - No-ops in TESTING mode unless ENABLE_TIMERS_IN_TESTS is set
    - on_expire runs inside an app context on a Socket.IO background task
    - Cancelling after expiry has fired is harmless
    """
    cancelled = threading.Event()

    if app.config.get('TESTING') and not app.config.get('ENABLE_TIMERS_IN_TESTS'):
        return cancelled.set

    app.logger.info(f"[timer-set] duration={duration}s")

    def _worker(delay: float):
        try:
            hb = int(app.config.get('TIMER_HEARTBEAT_SEC', 0))
        except (TypeError, ValueError):
            hb = 0
        waited = 0.0
        step = hb if hb > 0 else delay
        while waited < delay:
            chunk = min(step, delay - waited)
            if cancelled.wait(chunk):
                app.logger.info(f"[timer-abort] cancelled before expiry duration={delay}s")
                return
            waited += chunk
            if hb > 0 and waited < delay:
                app.logger.info(f"[timer-heartbeat] remaining={max(0.0, delay - waited):.1f}s")
        if cancelled.is_set():
            return
        cancelled.set()
        with app.app_context():
            app.logger.info(f"[timer-fire] duration={delay}s")
            on_expire()

    socketio.start_background_task(_worker, duration)
    return cancelled.set
