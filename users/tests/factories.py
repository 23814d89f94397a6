import factory
from common.choices import Role
from django.contrib.auth import get_user_model
from factory.django import DjangoModelFactory


class UserFactory(DjangoModelFactory):
    class Meta:
        model = get_user_model()

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    role = Role.STOCK_WORKER
    password = factory.PostGenerationMethodCall("set_password", "pass1234")


class AdminFactory(UserFactory):
    role = Role.ADMIN


class ManagerFactory(UserFactory):
    role = Role.MANAGER


class StockWorkerFactory(UserFactory):
    role = Role.STOCK_WORKER
