from decimal import Decimal
from unittest.mock import MagicMock

import kubernetes.client as api
import pytest

from kad import kube
from kad.tests.utils import make_pod


@pytest.mark.parametrize('container_id, expected', [
    ('docker://0123abcd', '0123abcd'),
    ('containerd://ffee', 'ffee'),
    ('plainid', 'plainid'),
    ('', ''),
    (None, ''),
])
def test_parse_container_runtime_id(container_id, expected):
    assert kube.parse_container_runtime_id(container_id) == expected


def test_get_container_runtime_id_matches_by_name():
    pod = make_pod('ns', 'app', {'a': {}, 'b': {}}, {'a': 'docker://aaa', 'b': 'docker://bbb'})
    assert kube.get_container_runtime_id(pod, 'b') == 'bbb'


def test_get_container_runtime_id_without_status():
    pod = make_pod('ns', 'app', {'a': {}})
    assert kube.get_container_runtime_id(pod, 'a') == ''

    pod.status = None
    assert kube.get_container_runtime_id(pod, 'a') == ''


def test_get_container_runtime_id_not_started():
    pod = make_pod('ns', 'app', {'a': {}}, {'a': None})
    assert kube.get_container_runtime_id(pod, 'a') == ''


def test_get_container_limits():
    container = api.V1Container(name='a', resources=api.V1ResourceRequirements(
        limits={'cpu': '500m', 'memory': '128Mi'},
        requests={'cpu': '100m'},
    ))
    assert kube.get_container_limits(container) == (Decimal('0.5'), Decimal(128 * 1024 * 1024))


def test_get_container_limits_undeclared():
    assert kube.get_container_limits(api.V1Container(name='a')) == (0, 0)

    container = api.V1Container(name='a', resources=api.V1ResourceRequirements(limits={'memory': '1Gi'}))
    cpu, memory = kube.get_container_limits(container)
    assert cpu == 0
    assert memory == 1024 ** 3


def test_quantity_values_round_up():
    assert kube.milli_value(Decimal('0.5')) == 500
    assert kube.milli_value(Decimal('0.0001')) == 1
    assert kube.value(Decimal('100')) == 100
    assert kube.value(Decimal('0.5')) == 1


def test_list_pods(monkeypatch):
    v1 = MagicMock()
    monkeypatch.setattr(kube.api, 'CoreV1Api', lambda: v1)

    assert kube.list_pods('ns') is v1.list_namespaced_pod.return_value
    v1.list_namespaced_pod.assert_called_once_with(namespace='ns')

    assert kube.list_pods() is v1.list_pod_for_all_namespaces.return_value
    v1.list_pod_for_all_namespaces.assert_called_once_with()
