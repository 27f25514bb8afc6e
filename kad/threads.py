import logging
import threading

log = logging.getLogger(__name__)


class SupervisedThread(threading.Thread):
    """
    Daemon thread whose termination, normal or not, is reported to its group.
    """

    def __init__(self):
        super().__init__(daemon=True)
        self.group_event = None

    def run(self):
        try:
            self.run_supervised()
        except Exception:
            log.exception('Thread %s crashed', self.name)
        else:
            log.info('Thread %s finished', self.name)
        finally:
            if self.group_event is not None:
                self.group_event.set()

    def run_supervised(self):
        raise NotImplementedError


class SupervisedThreadGroup:
    def __init__(self):
        self.threads = []
        self.event = threading.Event()

    def add_thread(self, thread):
        thread.group_event = self.event
        self.threads.append(thread)

    def start_all(self):
        for thread in self.threads:
            thread.start()

    def wait_any(self):
        """
        Blocks until one of the threads stops and returns it.
        """
        self.event.wait()
        for thread in self.threads:
            if not thread.is_alive():
                return thread
        # event is set right before the thread exits
        for thread in self.threads:
            thread.join(timeout=1)
            if not thread.is_alive():
                return thread
        return None
