from decimal import Decimal

import factory
from django.utils import timezone
from factory.django import DjangoModelFactory
from orders.models import Order


class OrderFactory(DjangoModelFactory):
    class Meta:
        model = Order

    user = factory.SubFactory("cart.tests.factories.UserFactory")
    number = factory.Sequence(lambda n: f"ORD-{n + 900000:06d}")
    email = factory.LazyAttribute(lambda o: o.user.email)
    order_items = factory.LazyFunction(
        lambda: [{"product_id": None, "name": "Loose part", "image": "", "unit_price": "1500.00", "quantity": 2}]
    )
    address = "12 Main St"
    city = "Manila"
    postal_code = "1000"
    country = "PH"
    payment_method = "PayPal"
    items_price = Decimal("3000.00")
    total_price = Decimal("3000.00")
    paid_at = factory.LazyFunction(timezone.now)
