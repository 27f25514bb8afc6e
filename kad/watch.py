import enum
import logging

import kubernetes.watch
import kubernetes.client.rest

log = logging.getLogger(__name__)


class WatchEventType(enum.Enum):
    ADDED = 'ADDED'
    MODIFIED = 'MODIFIED'
    DELETED = 'DELETED'
    BOOKMARK = 'BOOKMARK'
    ERROR = 'ERROR'
    DONE_INITIAL = 'DONE_INITIAL'


def object_key(obj):
    return obj.metadata.namespace, obj.metadata.name


class KubeWatcher:
    """
    Yields (event_type, obj) for every object returned by list_func.

    The initial listing is reported as ADDED events followed by a single
    DONE_INITIAL. Afterwards the collection is watched; each time the watch
    ends (every resync_seconds, or on 410 Gone) it is listed again: objects
    that disappeared in the meantime are reported as DELETED, then all listed
    objects are re-delivered as ADDED. Objects are identified by namespace
    and name, so a pod recreated under the same name is never reported as
    deleted.
    """

    def __init__(self, list_func, resync_seconds=300, **kwargs):
        self.list_func = list_func
        self.resync_seconds = resync_seconds
        self.kwargs = kwargs
        self.known = {}

    def __iter__(self):
        initial = True
        while True:
            resource_version = yield from self._list()
            if initial:
                initial = False
                yield WatchEventType.DONE_INITIAL, None
            try:
                yield from self._watch(resource_version)
            except kubernetes.client.rest.ApiException as err:
                if err.status != 410:
                    raise
                log.info('Watch expired, relisting')
            else:
                log.debug('Watch ended, relisting')

    def _list(self):
        resp = self.list_func(**self.kwargs)
        listed = {object_key(obj): obj for obj in resp.items}

        # a pod recreated under the same name shows up as ADDED, not DELETED
        for key in self.known.keys() - listed.keys():
            yield WatchEventType.DELETED, self.known[key]
        for obj in listed.values():
            yield WatchEventType.ADDED, obj

        self.known = listed
        return resp.metadata.resource_version

    def _watch(self, resource_version):
        watch = kubernetes.watch.Watch()
        stream = watch.stream(self.list_func,
                              resource_version=resource_version,
                              timeout_seconds=self.resync_seconds,
                              **self.kwargs)
        try:
            for event in stream:
                event_type = WatchEventType[event['type']]
                obj = event['object']

                if event_type == WatchEventType.ERROR:
                    raise Exception(f'Watch error: {event.get("raw_object")}')
                if event_type == WatchEventType.BOOKMARK:
                    continue

                if event_type == WatchEventType.DELETED:
                    self.known.pop(object_key(obj), None)
                else:
                    self.known[object_key(obj)] = obj
                yield event_type, obj
        finally:
            watch.stop()
