import threading
import logging

from kad import kube
from kad.rules import rule_key

log = logging.getLogger(__name__)


class CapacityRecord:
    __slots__ = ('cpu', 'memory', 'runtime_id')

    def __init__(self, cpu, memory, runtime_id):
        self.cpu = cpu
        self.memory = memory
        self.runtime_id = runtime_id

    def swap(self, cpu, memory, runtime_id):
        changed = False
        if self.runtime_id != runtime_id:
            self.runtime_id = runtime_id
            changed = True
        if self.cpu != cpu:
            self.cpu = cpu
            changed = True
        if self.memory != memory:
            self.memory = memory
            changed = True
        return changed

    def copy(self):
        return CapacityRecord(self.cpu, self.memory, self.runtime_id)

    def __eq__(self, other):
        if not isinstance(other, CapacityRecord):
            return NotImplemented
        return (self.cpu, self.memory, self.runtime_id) == (other.cpu, other.memory, other.runtime_id)

    def __repr__(self):
        return f'CapacityRecord(cpu={self.cpu}, memory={self.memory}, runtime_id={self.runtime_id!r})'


def workload_key(pod):
    return pod.metadata.namespace, pod.metadata.name


class Store:
    """
    Tracks container limits per pod and renders alert rules for them.

    A single lock guards the whole table: rendering reads every container of
    a pod and must not see a half-applied update.
    """

    def __init__(self, synthesizer):
        self.synthesizer = synthesizer
        self._lock = threading.Lock()
        self._workloads = {}

    def update(self, pod):
        """
        :return: True if any container was added or changed
        """
        key = workload_key(pod)
        changed = False
        with self._lock:
            for container in pod.spec.containers or []:
                # requests do not cap usage, so rules are derived from limits only
                cpu, memory = kube.get_container_limits(container)
                runtime_id = kube.get_container_runtime_id(pod, container.name)
                if self._update_unsafe(key, container.name, cpu, memory, runtime_id):
                    changed = True
        if changed:
            log.debug('Capacity of %s/%s changed', *key)
        return changed

    def _update_unsafe(self, key, name, cpu, memory, runtime_id):
        containers = self._workloads.get(key)
        if containers is None:
            self._workloads[key] = {name: CapacityRecord(cpu, memory, runtime_id)}
            return True
        record = containers.get(name)
        if record is None:
            containers[name] = CapacityRecord(cpu, memory, runtime_id)
            return True
        return record.swap(cpu, memory, runtime_id)

    def delete(self, pod):
        with self._lock:
            self._workloads.pop(workload_key(pod), None)

    def generate_alert_rule(self, pod):
        """
        :return: (storage key, rule text); empty text means the key should be removed
        """
        namespace, name = workload_key(pod)
        with self._lock:
            containers = self._workloads.get((namespace, name), {})
            text = self.synthesizer.render(namespace, name, containers.items())
        return rule_key(namespace, name), text

    def get_containers(self, namespace, name):
        with self._lock:
            containers = self._workloads.get((namespace, name), {})
            return {c: record.copy() for c, record in containers.items()}

    def workload_keys(self):
        with self._lock:
            return set(self._workloads)
