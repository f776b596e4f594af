"""
Test settings - uses SQLite database
"""

from .settings import *

# Override database settings to use SQLite
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test_db.sqlite3',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

GREEN_ICT_AUDIT = {
    'CRON_SECRET': 'test-cron-secret',
    'METHODOLOGY_PROFILE': 'v1-switzerland-eu-default',
    'AUTO_PUBLISH': True,
}

LOGGING['loggers']['green_ict']['level'] = 'WARNING'
