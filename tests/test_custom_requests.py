"""Custom order request storage tests."""

import pytest
from pydantic import ValidationError

from boutique.models import RequestStatus


REQUEST = {
    'name': 'Kavya Rao',
    'email': 'kavya@example.com',
    'phone': '9876543210',
    'requirements': 'Ivory lehenga with pastel resham work, size M',
    'budget': 40000,
}


class TestCustomOrderRequests:
    """Anonymous and signed-in requests"""

    def test_anonymous_request(self, storage):
        request = storage.create_custom_order_request(None, REQUEST)

        assert request.id is not None
        assert request.user_id is None
        assert request.status == 'new'
        assert request.created_at is not None
        assert request.budget == 40000

    def test_request_from_user(self, storage, user):
        request = storage.create_custom_order_request(user.id, REQUEST)

        assert request.user_id == user.id
        assert request.status == RequestStatus.NEW

    def test_status_cannot_be_chosen_on_creation(self, storage):
        request = storage.create_custom_order_request(None, dict(REQUEST, status='approved'))

        assert request.status == 'new'
        assert storage.get_custom_order_request(request.id).status == 'new'

    def test_requirements_are_required(self, storage):
        with pytest.raises(ValidationError):
            storage.create_custom_order_request(None, {'name': 'A', 'email': 'a@example.com'})

    def test_list_and_fetch(self, storage, user):
        first = storage.create_custom_order_request(None, REQUEST)
        second = storage.create_custom_order_request(user.id, dict(REQUEST, budget=None))

        assert [r.id for r in storage.get_custom_order_requests()] == [first.id, second.id]
        assert storage.get_custom_order_request(second.id).budget is None
        assert storage.get_custom_order_request(9999) is None

    def test_update_status(self, storage):
        request_id = storage.create_custom_order_request(None, REQUEST).id

        updated = storage.update_custom_order_request_status(request_id, 'quoted')

        assert updated.status == 'quoted'
        assert storage.update_custom_order_request_status(9999, 'quoted') is None
