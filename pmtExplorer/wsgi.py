"""WSGI entry point for the PMT data explorer.

Production servers (e.g. gunicorn) load the module-level `application`.
"""

from __future__ import annotations

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "pmtExplorer.settings")

application = get_wsgi_application()
