"""Slug helpers."""

from slugify import slugify


def generate_unique_slug(session, model, name, fallback='item'):
    """Return a slug for *name* that no *model* row uses yet.

    Appends -1, -2, ... to the slugified name until it is free. The unique
    index on the slug column still has the final word under concurrent inserts.
    """
    base_slug = slugify(name) if name else ''
    base_slug = base_slug or fallback
    slug = base_slug
    counter = 1
    while session.query(model.id).filter_by(slug=slug).first() is not None:
        slug = f'{base_slug}-{counter}'
        counter += 1
    return slug
