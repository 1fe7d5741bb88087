import decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("builds", "0001_initial"),
        ("checkout", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("number", models.CharField(blank=True, db_index=True, max_length=32, null=True, unique=True)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("order_items", models.JSONField(default=list)),
                ("address", models.CharField(max_length=255)),
                ("city", models.CharField(max_length=100)),
                ("postal_code", models.CharField(max_length=20)),
                ("country", models.CharField(max_length=100)),
                ("payment_method", models.CharField(max_length=50)),
                ("items_price", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=12)),
                (
                    "shipping_price",
                    models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=12),
                ),
                ("tax_price", models.DecimalField(decimal_places=2, default=decimal.Decimal("0.00"), max_digits=12)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("is_paid", models.BooleanField(default=True)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                (
                    "payment_state",
                    models.CharField(choices=[("pending", "Pending"), ("paid", "Paid")], default="paid", max_length=16),
                ),
                ("payment_details", models.JSONField(blank=True, null=True)),
                (
                    "delivery_state",
                    models.CharField(
                        choices=[("pending", "Pending"), ("delivered", "Delivered")],
                        db_index=True,
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("delivered_at", models.DateTimeField(blank=True, null=True)),
                ("is_build_order", models.BooleanField(default=False)),
                (
                    "checkout",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="order",
                        to="checkout.checkoutsession",
                    ),
                ),
                (
                    "source_build",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders",
                        to="builds.pcbuild",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-id"],
                "indexes": [
                    models.Index(
                        fields=["user", "delivery_state", "created_at"], name="orders_orde_user_id_65f1f3_idx"
                    )
                ],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("total_price__gte", 0)), name="order_total_non_negative"),
                    models.CheckConstraint(
                        condition=models.Q(("delivery_state", "pending"), ("delivered_at__isnull", False), _connector="OR"),
                        name="order_delivered_has_delivered_at",
                    ),
                ],
            },
        ),
    ]
