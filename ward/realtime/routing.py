from django.urls import re_path

from .consumers import TableChangesConsumer

websocket_urlpatterns = [
    re_path(r"^ws/changes/(?P<table>[a-z_]+)/$", TableChangesConsumer.as_asgi()),
]
