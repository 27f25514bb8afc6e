import os

from django.apps import AppConfig

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'kad.settings')


class App(AppConfig):
    name = 'kad'
