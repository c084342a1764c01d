"""
WSGI config for the hrm project.

It exposes the WSGI callable as a module-level variable named ``application``.
Realtime change feeds need the ASGI entry point (``hrm.asgi``); plain
WSGI serves the REST API only.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hrm.settings')

application = get_wsgi_application()
