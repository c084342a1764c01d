import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from ward.models import User


@pytest.fixture(autouse=True)
def _isolation(settings, tmp_path):
    # throttle counters live in the cache; uploads go to a throwaway folder
    cache.clear()
    settings.MEDIA_ROOT = str(tmp_path / "media")
    settings.CHANNEL_LAYERS = {"default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}}
    yield
    cache.clear()


def make_user(username, role=User.ROLE_USER, password="P@ssw0rd1", **extra):
    return User.objects.create_user(username=username, password=password, role=role, **extra)


@pytest.fixture
def admin_user(db):
    return make_user("admin", User.ROLE_ADMIN, full_name="Quản trị")


@pytest.fixture
def manager_user(db):
    return make_user("manager1", User.ROLE_MANAGER, full_name="Trưởng khoa")


@pytest.fixture
def plain_user(db):
    return make_user("user1", User.ROLE_USER)


def client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)
