import factory
from catalog.models import Category, Product
from factory import Faker
from factory.django import DjangoModelFactory


class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = Category

    name = Faker("word")


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    name = Faker("sentence", nb_words=3)
    sku = factory.Sequence(lambda n: f"SKU-{n:05d}")
    quantity = 10
    category = factory.SubFactory(CategoryFactory)
