"""Shared fixtures: a fresh in-memory database per test."""

import pytest

from boutique import create_app
from boutique.extensions import db
from boutique.storage import DatabaseStorage


@pytest.fixture
def app():
    """Application with all tables created, torn down after the test."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def storage(app):
    return DatabaseStorage(db.session)


@pytest.fixture
def user(storage):
    return storage.create_user({
        'username': 'meera',
        'password': 'hashed-secret',
        'name': 'Meera Iyer',
        'email': 'meera@example.com',
    })


@pytest.fixture
def other_user(storage):
    return storage.create_user({'username': 'arjun', 'password': 'hashed-other'})


@pytest.fixture
def category(storage):
    return storage.create_category({
        'name': 'Sarees',
        'slug': 'sarees',
        'description': 'Handwoven sarees',
    })


@pytest.fixture
def product(storage, category):
    return storage.create_product({
        'name': 'Banarasi Silk Saree',
        'slug': 'banarasi-silk-saree',
        'description': 'Maroon with gold zari',
        'price': 12500.0,
        'category_id': category.id,
        'image_urls': ['https://cdn.example.com/banarasi-1.jpg'],
        'features': ['Blouse piece included'],
        'fabric': 'Katan Silk',
        'work_details': 'Zari brocade',
        'featured': True,
    })


@pytest.fixture
def second_product(storage):
    return storage.create_product({
        'name': 'Printed Cotton Kurti',
        'slug': 'printed-cotton-kurti',
        'price': 950.0,
        'fabric': 'Cotton',
        'work_details': 'Screen print',
    })
