"""Category storage tests."""

import pytest
from sqlalchemy.exc import IntegrityError

from boutique.schemas import CategoryPatch


class TestCategoryStorage:
    """Category CRUD and slug handling"""

    def test_list_categories(self, storage, category):
        storage.create_category({'name': 'Lehengas', 'slug': 'lehengas'})

        assert [c.slug for c in storage.get_categories()] == ['sarees', 'lehengas']

    def test_get_by_id_and_slug(self, storage, category):
        assert storage.get_category(category.id).name == 'Sarees'
        assert storage.get_category_by_slug('sarees').id == category.id

    def test_unknown_slug_is_none(self, storage, category):
        assert storage.get_category_by_slug('dupattas') is None

    def test_slug_generated_from_name(self, storage):
        first = storage.create_category({'name': 'Bridal Lehengas'})
        second = storage.create_category({'name': 'Bridal Lehengas'})

        assert first.slug == 'bridal-lehengas'
        assert second.slug == 'bridal-lehengas-1'

    def test_slug_falls_back_when_name_has_no_letters(self, storage):
        assert storage.create_category({'name': '!!!'}).slug == 'category'

    def test_duplicate_slug_raises(self, storage, category):
        with pytest.raises(IntegrityError):
            storage.create_category({'name': 'Other Sarees', 'slug': 'sarees'})

    def test_partial_update_with_patch_schema(self, storage, category):
        updated = storage.update_category(category.id, CategoryPatch(description='Silk and cotton'))

        assert updated.description == 'Silk and cotton'
        assert updated.name == 'Sarees'
        assert updated.slug == 'sarees'

    def test_update_missing_category_is_none(self, storage):
        assert storage.update_category(9999, {'name': 'Nothing'}) is None

    def test_delete_category(self, storage, category):
        category_id = category.id

        assert storage.delete_category(category_id) is True
        assert storage.get_category(category_id) is None
        assert storage.delete_category(category_id) is False

    def test_delete_category_with_products_is_rejected_by_store(self, storage, category, product):
        with pytest.raises(IntegrityError):
            storage.delete_category(category.id)

        assert storage.get_category(category.id) is not None
