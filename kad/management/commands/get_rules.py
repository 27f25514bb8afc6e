from django.conf import settings
from django.core.management.base import BaseCommand

from kad import kube
from kad import kube_config
from kad.collectors.pods import make_store


class Command(BaseCommand):
    help = 'Print alert rules that would be generated for current pods'

    def add_arguments(self, parser):
        parser.add_argument('--namespace', default=settings.WATCH_NAMESPACE, help='Only this namespace')
        parser.add_argument('--pod', help='Only pods with this name')

    def handle(self, *args, **options):
        kube_config.init()
        store = make_store()

        pods = kube.list_pods(options['namespace']).items
        if options['pod']:
            pods = [p for p in pods if p.metadata.name == options['pod']]

        for pod in sorted(pods, key=lambda p: (p.metadata.namespace, p.metadata.name)):
            store.update(pod)
            key, rules = store.generate_alert_rule(pod)
            if not rules:
                continue
            self.stdout.write(f'# {key}')
            self.stdout.write(rules)
