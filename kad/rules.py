"""
Alert rule rendering.

Rule templates use ``[[ ]]`` for substitution so that Prometheus' own
``{{ $value }}`` placeholder is emitted verbatim and evaluated later by the
alerting engine.
"""
import jinja2

from kad.kube import milli_value, value

MEMORY_RULE_TEMPLATE = '''
ALERT MemoryUsageHigh
    IF sum(container_memory_usage_bytes{id="[[ id ]]"}) > [[ target ]]
    FOR 5m
    LABELS { severity = "[[ severity ]]", kubernetes_container_name = "[[ container ]]", kubernetes_pod_name = "[[ pod_name ]]", kubernetes_namespace = "[[ namespace ]]", id = "[[ id ]]"}
    ANNOTATIONS {
        summary = "Container [[ namespace ]]/[[ pod_name ]]/[[ container ]] memory usage high",
        description = "Container [[ namespace ]]/[[ pod_name ]]/[[ container ]] has high memory usage of {{ $value }}",
    }
'''

CPU_RULE_TEMPLATE = '''
ALERT CPUUsageHigh
    IF sum(rate(container_cpu_usage_seconds_total{id="[[ id ]]"}[5m])) > [[ target ]]
    FOR 5m
    LABELS { severity = "[[ severity ]]", kubernetes_container_name = "[[ container ]]", kubernetes_pod_name = "[[ pod_name ]]", kubernetes_namespace = "[[ namespace ]]", id = "[[ id ]]"}
    ANNOTATIONS {
        summary = "Container [[ namespace ]]/[[ pod_name ]]/[[ container ]] cpu usage high",
        description = "Container [[ namespace ]]/[[ pod_name ]]/[[ container ]] has high cpu usage of {{ $value }}",
    }
'''

WARNING = 'warning'
CRITICAL = 'critical'


def make_environment():
    return jinja2.Environment(
        variable_start_string='[[',
        variable_end_string=']]',
        block_start_string='[%',
        block_end_string='%]',
        comment_start_string='[#',
        comment_end_string='#]',
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )


def rule_key(namespace, name):
    return f'{namespace}.{name}.generated.rule'


def format_cpu_target(cpu, factor):
    return '%.3f' % (milli_value(cpu) * factor / 1000)


def format_memory_target(memory, factor):
    return '%.0f' % (value(memory) * factor)


class RuleSynthesizer:
    def __init__(self, warning_factor, critical_factor, id_prefix=''):
        for severity, factor in ((WARNING, warning_factor), (CRITICAL, critical_factor)):
            if factor <= 0:
                raise ValueError(f'{severity} factor must be positive, got {factor}')

        self.severities = ((WARNING, warning_factor), (CRITICAL, critical_factor))
        self.id_prefix = id_prefix

        env = make_environment()
        self.cpu_template = env.from_string(CPU_RULE_TEMPLATE)
        self.memory_template = env.from_string(MEMORY_RULE_TEMPLATE)

    def render(self, namespace, pod_name, containers):
        """
        :param containers: iterable of (container_name, CapacityRecord)
        :return: concatenated rule text, empty if no container qualifies
        """
        return ''.join(self.render_container(namespace, pod_name, name, record)
                       for name, record in containers)

    def render_container(self, namespace, pod_name, container, record):
        # no metrics source until the container has been started
        if not record.runtime_id:
            return ''

        context = {
            'namespace': namespace,
            'pod_name': pod_name,
            'container': container,
            'id': self.id_prefix + record.runtime_id,
        }

        chunks = []
        if record.cpu:
            for severity, factor in self.severities:
                chunks.append(self.cpu_template.render(
                    context, severity=severity, target=format_cpu_target(record.cpu, factor)))
        if record.memory:
            for severity, factor in self.severities:
                chunks.append(self.memory_template.render(
                    context, severity=severity, target=format_memory_target(record.memory, factor)))
        return ''.join(chunks)
