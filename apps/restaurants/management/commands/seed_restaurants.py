"""
Management command to load a sample restaurant menu.

Usage:
    python manage.py seed_restaurants [--clear]

This creates one restaurant with burger, chicken and side categories,
size variants on the burgers and a shared set of paid addons.
"""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.restaurants.models import (
    Restaurant,
    MenuCategory,
    MenuItem,
    MenuItemVariant,
    MenuItemAddon,
)


TOPPINGS = [
    ('Cheddar Cheese Slice', '25'),
    ('Cheddar Cheese Jar (Dip)', '45'),
    ('Beef Bacon', '55'),
    ('Sauteed Mushrooms', '40'),
    ('Jalapeno Slices', '20'),
    ('Crispy Onion Rings (2 pcs)', '30'),
    ('Mozzarella Stick (1 pc)', '35'),
]

SAUCES = [
    ('Buffalo Sauce', '20'),
    ('BBQ Sauce', '20'),
    ('Secret Sauce', '25'),
    ('Blue Cheese Sauce', '30'),
]

BEEF_EXTRAS = [
    ('Extra 150g Beef Patty', '105'),
    ('Extra 200g Beef Patty', '140'),
]

BURGER_ADDONS = BEEF_EXTRAS + TOPPINGS + SAUCES
CHICKEN_ADDONS = TOPPINGS + SAUCES

MENU = [
    {
        'name': 'Beef Burger Sandwiches',
        'items': [
            ('Old School', 'Pure beef patty, signature sauce, and cheddar cheese.', '205', [('200g', '59'), ('400g', '218')], BURGER_ADDONS),
            ('Shiitake Mushroom', 'Sauteed mushroom, cheddar cheese, and creamy mayonnaise.', '209', [('200g', '66'), ('400g', '219')], BURGER_ADDONS),
            ('Hitchhiker', 'Mozzarella sticks, beef bacon, ketchup, and mustard.', '252', [('200g', '63'), ('400g', '207')], BURGER_ADDONS),
            ('Charbroiled BBQ', 'Grilled burger, sweet onion, BBQ sauce, and Swiss cheese.', '217', [('200g', '63'), ('400g', '205')], BURGER_ADDONS),
        ],
    },
    {
        'name': 'Chicken Sandwiches',
        'items': [
            ("Cholo's Chicken", 'Chicken strips, jalapenos, and melted cheddar.', '190', [], CHICKEN_ADDONS),
            ('Chicken Buster', 'Chicken strips with melted cheddar cheese.', '191', [], CHICKEN_ADDONS),
        ],
    },
    {
        'name': 'Appetizers & Sides',
        'items': [
            ('French Fries', '', '62', [], []),
            ('Cheesy Fries', '', '109', [], []),
            ('Onion Rings', '', '68', [], []),
            ('Chicken Tenders', '', '133', [], []),
        ],
    },
]


class Command(BaseCommand):
    help = 'Load a sample restaurant menu'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete restaurants that have no orders before loading the sample menu',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing restaurants...')
            Restaurant.objects.filter(orders__isnull=True).delete()

        restaurant = Restaurant.objects.create(
            name='Buffalo Burger',
            description='Pure beef burgers, flame-grilled to perfection.',
        )

        item_count = 0
        for position, category_data in enumerate(MENU):
            category = MenuCategory.objects.create(
                restaurant=restaurant,
                name=category_data['name'],
                position=position,
            )
            for name, description, base_price, variants, addons in category_data['items']:
                item = MenuItem.objects.create(
                    category=category,
                    name=name,
                    description=description,
                    base_price=Decimal(base_price),
                )
                MenuItemVariant.objects.bulk_create([
                    MenuItemVariant(menu_item=item, name=v_name, price_diff=Decimal(diff))
                    for v_name, diff in variants
                ])
                MenuItemAddon.objects.bulk_create([
                    MenuItemAddon(menu_item=item, name=a_name, price=Decimal(price))
                    for a_name, price in addons
                ])
                item_count += 1

        self.stdout.write(self.style.SUCCESS(
            f'Created {restaurant.name} with {item_count} menu items'
        ))
