from decimal import Decimal

import factory
from checkout.models import CheckoutSession
from django.utils import timezone
from factory.django import DjangoModelFactory


class CheckoutSessionFactory(DjangoModelFactory):
    class Meta:
        model = CheckoutSession

    user = factory.SubFactory("cart.tests.factories.UserFactory")
    line_items = factory.LazyFunction(
        lambda: [
            {
                "product_id": None,
                "build_id": None,
                "name": "Loose part",
                "image": "",
                "unit_price": "1500.00",
                "quantity": 2,
                "size": "",
                "color": "",
                "is_build": False,
            }
        ]
    )
    address = "12 Main St"
    city = "Manila"
    postal_code = "1000"
    country = "PH"
    payment_method = "PayPal"
    total_price = Decimal("3000.00")


class PaidCheckoutSessionFactory(CheckoutSessionFactory):
    payment_state = CheckoutSession.STATE_PAID
    paid_at = factory.LazyFunction(timezone.now)
    payment_details = factory.LazyFunction(lambda: {"transaction_id": "PAY-1", "amount": "3000.00"})
