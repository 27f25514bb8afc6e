import queue
import logging
from wsgiref.simple_server import make_server, WSGIRequestHandler

from django.conf import settings
from django.core.wsgi import get_wsgi_application

from kad import kube
from kad import kube_config
from kad.configmap import ConfigMapSyncer
from kad.rules import RuleSynthesizer
from kad.shutdown import install_shutdown_signal_handlers
from kad.store import Store
from kad.threads import SupervisedThread, SupervisedThreadGroup
from kad.watch import KubeWatcher, WatchEventType

log = logging.getLogger(__name__)


def main():
    install_shutdown_signal_handlers()
    kube_config.init()

    store = make_store()
    syncer = ConfigMapSyncer(settings.CONFIGMAP_NAMESPACE, settings.CONFIGMAP_NAME)

    q = queue.Queue()
    threads = SupervisedThreadGroup()
    threads.add_thread(WatcherThread(q, settings.WATCH_NAMESPACE, settings.RESYNC_PERIOD_SECONDS))
    threads.add_thread(HandlerThread(q, store, syncer))
    threads.add_thread(HealthzThread(settings.HEALTHZ_PORT))

    log.info('Starting alert discovery')
    threads.start_all()
    stopped = threads.wait_any()
    log.error('Thread %s stopped, exiting', stopped.name if stopped else None)


def make_store():
    synthesizer = RuleSynthesizer(
        warning_factor=settings.WARNING_FACTOR,
        critical_factor=settings.CRITICAL_FACTOR,
        id_prefix=settings.RULE_ID_PREFIX,
    )
    return Store(synthesizer)


class WatcherThread(SupervisedThread):
    def __init__(self, queue, namespace='', resync_seconds=300):
        super().__init__()
        self.queue = queue
        self.namespace = namespace
        self.resync_seconds = resync_seconds

    def run_supervised(self):
        list_func, kwargs = kube.get_pod_list_func(self.namespace)
        for event_type, pod in KubeWatcher(list_func, self.resync_seconds, **kwargs):
            self.queue.put((event_type, pod))


class HandlerThread(SupervisedThread):
    def __init__(self, queue, store, syncer):
        super().__init__()
        self.queue = queue
        self.store = store
        self.syncer = syncer

    def run_supervised(self):
        while True:
            event_type, pod = self.queue.get()
            try:
                self.handle(event_type, pod)
            except Exception:
                log.exception('Failed to handle %s on pod %s/%s',
                              event_type.name, pod.metadata.namespace, pod.metadata.name)

    def handle(self, event_type, pod):
        if event_type == WatchEventType.DONE_INITIAL:
            log.info('Initial sync done, tracking %d pods', len(self.store.workload_keys()))
            return

        log.info('%s %s/%s', event_type.name, pod.metadata.namespace, pod.metadata.name)

        if event_type in (WatchEventType.ADDED, WatchEventType.MODIFIED):
            if self.store.update(pod):
                self.syncer.sync(*self.store.generate_alert_rule(pod))
        elif event_type == WatchEventType.DELETED:
            self.store.delete(pod)
            self.syncer.sync(*self.store.generate_alert_rule(pod))


class QuietRequestHandler(WSGIRequestHandler):
    def log_message(self, format, *args):
        log.debug('%s - %s', self.address_string(), format % args)


class HealthzThread(SupervisedThread):
    def __init__(self, port):
        super().__init__()
        self.port = port

    def run_supervised(self):
        httpd = make_server('', self.port, get_wsgi_application(), handler_class=QuietRequestHandler)
        log.info('Serving healthz on port %d', self.port)
        httpd.serve_forever()
