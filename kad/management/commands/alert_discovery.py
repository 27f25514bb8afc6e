from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from kad.collectors.pods import main


class Command(BaseCommand):
    help = 'Watches pods and keeps generated alert rules in sync'

    def handle(self, *args, **options):
        if not settings.CONFIGMAP_NAMESPACE or not settings.CONFIGMAP_NAME:
            raise CommandError(f'not enough config: CONFIGMAP_NAMESPACE={settings.CONFIGMAP_NAMESPACE!r}, '
                               f'CONFIGMAP_NAME={settings.CONFIGMAP_NAME!r}')
        main()
