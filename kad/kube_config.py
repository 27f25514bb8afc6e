import logging

import kubernetes
from django.conf import settings

log = logging.getLogger(__name__)


def init():
    configure(settings.KUBE_API_URL, settings.KUBE_IN_CLUSTER)


def configure(api_url=None, in_cluster=False):
    if in_cluster:
        log.info('Using in-cluster kubernetes config')
        kubernetes.config.load_incluster_config()
    elif api_url:
        log.info('Using kubernetes API at %s', api_url)
        conf = kubernetes.client.Configuration()
        conf.host = api_url
        kubernetes.client.Configuration.set_default(conf)
    else:
        log.info('Using local kubeconfig')
        kubernetes.config.load_kube_config()
