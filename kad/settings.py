import environ

env = environ.Env()

env.scheme['DEV_ENV'] = (bool, False)
env.scheme['SECRET_KEY'] = (str, 'kad-insecure-secret-key')
env.scheme['LOG_LEVEL'] = (str, 'INFO')

if env('DEV_ENV'):
    env.scheme['KUBE_API_URL'] = (str, 'http://127.0.0.1:8001')
    env.scheme['KUBE_IN_CLUSTER'] = (bool, False)
else:
    env.scheme['KUBE_API_URL'] = (str, None)
    env.scheme['KUBE_IN_CLUSTER'] = (bool, True)

env.scheme['WATCH_NAMESPACE'] = (str, '')
env.scheme['CONFIGMAP_NAMESPACE'] = (str, '')
env.scheme['CONFIGMAP_NAME'] = (str, '')
env.scheme['WARNING_FACTOR'] = (float, 0.8)
env.scheme['CRITICAL_FACTOR'] = (float, 0.95)
env.scheme['RULE_ID_PREFIX'] = (str, '/docker/')
env.scheme['HEALTHZ_PORT'] = (int, 23333)
env.scheme['RESYNC_PERIOD_SECONDS'] = (int, 300)

DEBUG = env('DEV_ENV')
SECRET_KEY = env('SECRET_KEY')
ALLOWED_HOSTS = ['*']

INSTALLED_APPS = ['kad.App']
MIDDLEWARE = []
ROOT_URLCONF = 'kad.urls'
DATABASES = {}
USE_TZ = True

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'default',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': env('LOG_LEVEL'),
    },
}

KUBE_API_URL = env('KUBE_API_URL')
KUBE_IN_CLUSTER = env('KUBE_IN_CLUSTER')
WATCH_NAMESPACE = env('WATCH_NAMESPACE')

# ConfigMap the generated rule files are written into
CONFIGMAP_NAMESPACE = env('CONFIGMAP_NAMESPACE')
CONFIGMAP_NAME = env('CONFIGMAP_NAME')

# Thresholds relative to the container limit
WARNING_FACTOR = env('WARNING_FACTOR')
CRITICAL_FACTOR = env('CRITICAL_FACTOR')

# cAdvisor labels containers by cgroup path, not by bare runtime id
RULE_ID_PREFIX = env('RULE_ID_PREFIX')

HEALTHZ_PORT = env('HEALTHZ_PORT')
RESYNC_PERIOD_SECONDS = env('RESYNC_PERIOD_SECONDS')
