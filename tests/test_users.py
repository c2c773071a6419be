"""User storage tests."""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError


class TestUserStorage:
    """Lookups, creation and partial updates of users"""

    def test_create_user_returns_generated_fields(self, storage, user):
        assert user.id is not None
        assert user.created_at is not None
        assert user.is_admin is False
        assert user.username == 'meera'

    def test_admin_flag_is_ignored_on_create(self, storage):
        created = storage.create_user({'username': 'mallory', 'password': 'x',
                                       'is_admin': True})

        assert created.is_admin is False
        assert storage.get_user_by_username('mallory').is_admin is False

    def test_get_user_by_id_and_username(self, storage, user):
        assert storage.get_user(user.id).username == 'meera'
        assert storage.get_user_by_username('meera').id == user.id

    def test_unknown_user_is_none(self, storage, user):
        assert storage.get_user(9999) is None
        assert storage.get_user_by_username('nobody') is None

    def test_duplicate_username_raises_and_session_recovers(self, storage, user):
        with pytest.raises(IntegrityError):
            storage.create_user({'username': 'meera', 'password': 'x'})

        # The failed insert must not poison later calls
        again = storage.create_user({'username': 'meera2', 'password': 'x'})
        assert storage.get_user_by_username('meera2').id == again.id

    def test_update_user_only_touches_supplied_fields(self, storage, user):
        updated = storage.update_user(user.id, {'name': 'Meera Nair'})

        assert updated.name == 'Meera Nair'
        assert updated.email == 'meera@example.com'
        assert updated.password == 'hashed-secret'

    def test_update_user_can_grant_admin(self, storage, user):
        assert storage.update_user(user.id, {'is_admin': True}).is_admin is True

    def test_update_missing_user_is_none(self, storage):
        assert storage.update_user(9999, {'name': 'Ghost'}) is None

    def test_empty_patch_returns_row_unchanged(self, storage, user):
        assert storage.update_user(user.id, {}).name == 'Meera Iyer'

    def test_patch_rejects_null_username(self, storage, user):
        with pytest.raises(ValidationError):
            storage.update_user(user.id, {'username': None})

    def test_patch_rejects_generated_columns(self, storage, user):
        with pytest.raises(ValidationError):
            storage.update_user(user.id, {'id': 42})
