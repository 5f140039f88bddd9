"""
WSGI config for the spotgate project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'spotgate.settings')

application = get_wsgi_application()
