"""Settings used in production. Values are read from the environment."""

from server.settings.components import config

DEBUG = False

SECRET_KEY = config('DJANGO_SECRET_KEY')

ALLOWED_HOSTS = config(
    'DOMAIN_NAME',
    cast=lambda hosts: [host.strip() for host in hosts.split(',')],
)

SECURE_CONTENT_TYPE_NOSNIFF = True
