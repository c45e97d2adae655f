"""Cancellation token shared between a signal handler and the monitoring loop."""
import logging
import threading

logger = logging.getLogger(__name__)


class CancellationToken:
    """One-shot stop flag.

    Set once from a signal handler (or any thread), polled by the monitoring
    loop at tick boundaries only.
    """
    
    def __init__(self):
        self._event = threading.Event()
    
    def cancel(self) -> None:
        """Request the monitoring loop to stop. Further calls are no-ops."""
        if not self._event.is_set():
            self._event.set()
            logger.info("Cancellation requested")
    
    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
