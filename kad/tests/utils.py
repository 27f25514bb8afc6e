import kubernetes.client as api


def make_pod(namespace, name, containers, statuses=None, uid=None):
    """
    :param containers: {name: limits dict}, e.g. {'web': {'cpu': '500m', 'memory': '128Mi'}}
    :param statuses: {name: container_id}, e.g. {'web': 'docker://abc123'}
    """
    spec_containers = [
        api.V1Container(name=c, resources=api.V1ResourceRequirements(limits=limits or None))
        for c, limits in containers.items()
    ]
    container_statuses = [
        api.V1ContainerStatus(name=c, container_id=container_id, image='img', image_id='', ready=True,
                              restart_count=0)
        for c, container_id in (statuses or {}).items()
    ]
    return api.V1Pod(
        metadata=api.V1ObjectMeta(namespace=namespace, name=name, uid=uid or f'{namespace}-{name}'),
        spec=api.V1PodSpec(containers=spec_containers),
        status=api.V1PodStatus(container_statuses=container_statuses or None),
    )
