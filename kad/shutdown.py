import sys
import signal
import logging

log = logging.getLogger(__name__)


def install_shutdown_signal_handlers():
    signal.signal(signal.SIGTERM, _handle_shutdown)
    signal.signal(signal.SIGINT, _handle_shutdown)


def _handle_shutdown(signum, frame):
    log.info('Received %s, shutting down', signal.Signals(signum).name)
    sys.exit(0)
