"""Seed script to populate database with sample data."""

from werkzeug.security import generate_password_hash

from boutique import create_app, get_storage
from boutique.extensions import db


CATALOG = [
    {
        'category': {
            'name': 'Sarees',
            'description': 'Handwoven and embroidered sarees for every occasion.',
        },
        'products': [
            {'name': 'Banarasi Silk Saree', 'price': 12500, 'fabric': 'Pure Katan Silk',
             'work_details': 'Zari brocade with meenakari buttis', 'featured': True,
             'description': 'Deep maroon Banarasi with an antique gold zari pallu.',
             'features': ['Blouse piece included', 'Dry clean only']},
            {'name': 'Chanderi Cotton Saree', 'price': 3200, 'fabric': 'Chanderi Cotton Silk',
             'work_details': 'Hand block print',
             'description': 'Lightweight pastel saree for daytime wear.',
             'features': ['Blouse piece included']},
        ]
    },
    {
        'category': {
            'name': 'Lehengas',
            'description': 'Bridal and festive lehengas.',
        },
        'products': [
            {'name': 'Bridal Velvet Lehenga', 'price': 48000, 'fabric': 'Velvet',
             'work_details': 'Zardozi and dabka hand embroidery', 'featured': True,
             'description': 'Heavy bridal lehenga with a net dupatta.',
             'features': ['Made to measure', 'Can-can attached', 'Dupatta included']},
            {'name': 'Georgette Festive Lehenga', 'price': 15800, 'fabric': 'Georgette',
             'work_details': 'Sequin and mirror work',
             'description': 'Flowing festive lehenga in emerald green.',
             'features': ['Semi-stitched']},
        ]
    },
    {
        'category': {
            'name': 'Kurtis',
            'description': 'Everyday and occasion kurtis.',
        },
        'products': [
            {'name': 'Chikankari Anarkali Kurti', 'price': 2800, 'fabric': 'Georgette',
             'work_details': 'Lucknowi chikankari',
             'description': 'Floor-length anarkali with all-over chikan work.',
             'features': ['Inner lining included']},
            {'name': 'Printed Cotton Kurti', 'price': 950, 'fabric': 'Cotton',
             'work_details': 'Screen print', 'in_stock': False,
             'description': 'Straight-cut kurti for daily wear.'},
        ]
    },
]


def seed_database():
    """Seed the database with sample data."""
    app = create_app()

    with app.app_context():
        # Create tables
        db.create_all()
        storage = get_storage()

        # Check if already seeded
        if storage.get_user_by_username('admin'):
            print('Database already seeded!')
            return

        print('Seeding database...')

        # Create Admin
        admin = storage.create_user({
            'username': 'admin',
            'password': generate_password_hash('admin123'),
            'name': 'Admin User',
            'email': 'admin@example.com',
        })
        storage.update_user(admin.id, {'is_admin': True})

        for entry in CATALOG:
            category = storage.create_category(entry['category'])
            print(f'  Category: {category.name} ({category.slug})')
            for product_data in entry['products']:
                product = storage.create_product(dict(product_data, category_id=category.id))
                print(f'    Product: {product.name} - ₹{product.price:.2f}')

        print('Database seeded successfully!')


if __name__ == '__main__':
    seed_database()
