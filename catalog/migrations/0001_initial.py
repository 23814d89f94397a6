import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
            ],
            options={
                "ordering": ["id"],
                "verbose_name_plural": "categories",
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("name", ""), _negated=True), name="category_name_not_blank"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("sku", models.CharField(max_length=64, unique=True)),
                ("quantity", models.IntegerField(default=0)),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="products",
                        to="catalog.category",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["category", "id"], name="catalog_pro_categor_6f1d2a_idx"),
                    models.Index(fields=["quantity"], name="catalog_pro_quantit_9b3c41_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("quantity__gte", 0)), name="product_quantity_non_negative"),
                    models.CheckConstraint(condition=models.Q(("name", ""), _negated=True), name="product_name_not_blank"),
                    models.CheckConstraint(condition=models.Q(("sku", ""), _negated=True), name="product_sku_not_blank"),
                ],
            },
        ),
    ]
