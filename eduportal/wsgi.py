"""WSGI config for eduportal.

Exposes the WSGI callable used by production servers as a module-level variable named `application`.
"""

from __future__ import annotations

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eduportal.settings")

application = get_wsgi_application()

