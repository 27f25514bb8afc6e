from decimal import Decimal, ROUND_CEILING

import kubernetes.client as api
from kubernetes.utils import parse_quantity

ZERO = Decimal(0)


def list_pods(namespace=''):
    list_func, kwargs = get_pod_list_func(namespace)
    return list_func(**kwargs)


def get_pod_list_func(namespace=''):
    v1 = api.CoreV1Api()
    if namespace:
        return v1.list_namespaced_pod, {'namespace': namespace}
    return v1.list_pod_for_all_namespaces, {}


def get_container_limits(container):
    """
    :return: (cpu, memory) as Decimal, zero when the limit is not declared
    """
    limits = {}
    if container.resources and container.resources.limits:
        limits = container.resources.limits
    return parse_quantity(limits.get('cpu', ZERO)), parse_quantity(limits.get('memory', ZERO))


def get_container_runtime_id(pod, container_name):
    statuses = pod.status.container_statuses if pod.status else None
    for status in statuses or []:
        if status.name == container_name:
            return parse_container_runtime_id(status.container_id)
    return ''


def parse_container_runtime_id(container_id):
    # docker://0123abcd -> 0123abcd
    if not container_id:
        return ''
    return container_id.split('//')[-1]


def milli_value(q):
    return int((q * 1000).to_integral_value(rounding=ROUND_CEILING))


def value(q):
    return int(q.to_integral_value(rounding=ROUND_CEILING))
