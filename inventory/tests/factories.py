import factory
from common.choices import MovementReason, MovementType
from factory.django import DjangoModelFactory
from inventory.models import StockMovement


class StockMovementFactory(DjangoModelFactory):
    """Raw ledger rows for read-side tests.

    Does not touch the product balance; use ``inventory.services.adjust_stock``
    when the balance matters.
    """

    class Meta:
        model = StockMovement

    product = factory.SubFactory("catalog.tests.factories.ProductFactory")
    user = factory.SubFactory("users.tests.factories.UserFactory")
    movement_type = MovementType.INBOUND
    quantity = 1
    reason = MovementReason.ADJUSTMENT
