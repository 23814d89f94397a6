"""Seed the demo catalog (categories and products) and, optionally, role users.

Re-running is idempotent; existing categories are reused by name and
products by SKU. Opening quantities are only applied to newly created
products so re-seeding never rewrites stock levels.
"""

from catalog.models import Category, Product
from common.choices import Role
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

CATEGORIES = [
    "Electronics",
    "Clothing",
    "Books",
    "Food & Beverages",
    "Home & Garden",
]

PRODUCTS = [
    {"name": "Laptop Dell XPS 13", "sku": "DELL-XPS-001", "category": "Electronics", "quantity": 15},
    {"name": "iPhone 14 Pro", "sku": "APPL-IP14-001", "category": "Electronics", "quantity": 8},
    {"name": 'Samsung TV 55"', "sku": "SAMS-TV55-001", "category": "Electronics", "quantity": 5},
    {"name": "T-Shirt Blue L", "sku": "TSH-BLU-L-001", "category": "Clothing", "quantity": 50},
    {"name": "Jeans Black 32", "sku": "JNS-BLK-32-001", "category": "Clothing", "quantity": 30},
    {"name": "Laravel Book", "sku": "BOOK-LAR-001", "category": "Books", "quantity": 20},
    {"name": "PHP Cookbook", "sku": "BOOK-PHP-001", "category": "Books", "quantity": 12},
    {"name": "Coffee Beans 1kg", "sku": "COFF-BEAN-001", "category": "Food & Beverages", "quantity": 25},
    {"name": "Green Tea Box", "sku": "TEA-GRN-001", "category": "Food & Beverages", "quantity": 40},
    {"name": "Garden Chair", "sku": "GARD-CHR-001", "category": "Home & Garden", "quantity": 18},
]

USERS = [
    {"username": "admin", "email": "admin@example.com", "role": Role.ADMIN},
    {"username": "manager", "email": "manager@example.com", "role": Role.MANAGER},
    {"username": "worker", "email": "worker@example.com", "role": Role.STOCK_WORKER},
]


class Command(BaseCommand):
    help = "Seed demo catalog data (categories, products) and optionally one user per role"

    def add_arguments(self, parser):
        parser.add_argument(
            "--with-users",
            action="store_true",
            help="Also create an admin, a manager and a stock worker account",
        )
        parser.add_argument(
            "--password",
            default="ChangeMe123!",
            help="Password for newly created seed users",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog data...")

        cat_objs = {}
        for name in CATEGORIES:
            cat = Category.objects.filter(name=name).order_by("id").first()
            if cat is None:
                cat = Category.objects.create(name=name)
            cat_objs[name] = cat

        created = 0
        for p in PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                sku=p["sku"],
                defaults={
                    "name": p["name"],
                    "category": cat_objs[p["category"]],
                    "quantity": p["quantity"],
                },
            )
            created += int(was_created)

        if options["with_users"]:
            User = get_user_model()
            for u in USERS:
                if User.objects.filter(username=u["username"]).exists():
                    continue
                user = User(username=u["username"], email=u["email"], role=u["role"])
                user.set_password(options["password"])
                user.save()

        self.stdout.write(self.style.SUCCESS(f"Catalog seed complete. New products: {created}"))
