import logging

import kubernetes.client as api
import kubernetes.client.rest

log = logging.getLogger(__name__)


class ConfigMapSyncer:
    """
    Keeps one data key per pod in a ConfigMap consumed by Prometheus.
    """

    def __init__(self, namespace, name, v1=None):
        self.namespace = namespace
        self.name = name
        self.v1 = v1 or api.CoreV1Api()

    def sync(self, key, rules):
        """
        Sets key to rules, or removes it when rules is empty.

        :return: True if the ConfigMap was written
        """
        try:
            cm = self.v1.read_namespaced_config_map(self.name, self.namespace)
        except kubernetes.client.rest.ApiException as err:
            log.error('Failed to get configmap %s/%s: %s %s', self.namespace, self.name, err.status, err.reason)
            return False

        data = cm.data or {}
        if not rules:
            if key not in data:
                log.debug('No rules for %s, nothing to remove', key)
                return False
            del data[key]
        elif data.get(key) == rules:
            log.info('No changes of rules for %s, ignore', key)
            return False
        else:
            data[key] = rules
        cm.data = data

        log.info('Updating alert rules %s in configmap %s/%s', key, self.namespace, self.name)
        try:
            self.v1.replace_namespaced_config_map(self.name, self.namespace, cm)
        except kubernetes.client.rest.ApiException as err:
            log.error('Failed to update configmap %s/%s: %s %s', self.namespace, self.name, err.status, err.reason)
            return False
        return True
