"""
WSGI config for the lanyard collection platform.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'lanyard_platform.settings')

application = get_wsgi_application()
