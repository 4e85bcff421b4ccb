"""
WSGI config for LicenseBindingService project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseBindingService.settings.dev")

application = get_wsgi_application()
