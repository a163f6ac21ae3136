"""
Pytest fixtures for Armory tests.
"""

import pytest
from django.contrib.auth import get_user_model
from django.test import Client

from armory.models import Base, Membership, Role


User = get_user_model()


@pytest.fixture
def alpha(db):
    """Create base Alpha."""
    return Base.objects.create(code='alpha', name='Base Alpha')


@pytest.fixture
def bravo(db):
    """Create base Bravo."""
    return Base.objects.create(code='bravo', name='Base Bravo')


def _member(username, role, base=None):
    user = User.objects.create_user(username=username, password='testpass123')
    Membership.objects.create(user=user, role=role, base=base)
    return user


@pytest.fixture
def admin_member(db, alpha):
    """Admin with Alpha as home base."""
    return _member('admin', Role.ADMIN, alpha)


@pytest.fixture
def commander(db, alpha):
    """Base commander of Alpha."""
    return _member('commander', Role.COMMANDER, alpha)


@pytest.fixture
def logistics(db, alpha):
    """Logistics officer of Alpha."""
    return _member('logistics', Role.LOGISTICS, alpha)


@pytest.fixture
def bravo_logistics(db, bravo):
    """Logistics officer of Bravo."""
    return _member('bravo-logistics', Role.LOGISTICS, bravo)


@pytest.fixture
def outsider(db):
    """Authenticated user without a membership."""
    return User.objects.create_user(username='outsider', password='testpass123')


def _client_for(user):
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def admin_member_client(admin_member):
    return _client_for(admin_member)


@pytest.fixture
def commander_client(commander):
    return _client_for(commander)


@pytest.fixture
def logistics_client(logistics):
    return _client_for(logistics)


@pytest.fixture
def bravo_client(bravo_logistics):
    return _client_for(bravo_logistics)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)
