import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("builds", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="CheckoutSession",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("line_items", models.JSONField(default=list)),
                ("address", models.CharField(max_length=255)),
                ("city", models.CharField(max_length=100)),
                ("postal_code", models.CharField(max_length=20)),
                ("country", models.CharField(max_length=100)),
                ("payment_method", models.CharField(max_length=50)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "payment_state",
                    models.CharField(
                        choices=[("pending", "Pending"), ("paid", "Paid")],
                        db_index=True,
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("payment_details", models.JSONField(blank=True, null=True)),
                (
                    "finalization_state",
                    models.CharField(
                        choices=[("open", "Open"), ("finalized", "Finalized")],
                        db_index=True,
                        default="open",
                        max_length=16,
                    ),
                ),
                ("finalized_at", models.DateTimeField(blank=True, null=True)),
                ("is_build_checkout", models.BooleanField(default=False)),
                (
                    "source_build",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="checkouts",
                        to="builds.pcbuild",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="checkouts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-id"],
                "indexes": [models.Index(fields=["user", "created_at"], name="checkout_ch_user_id_1c0e0c_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("total_price__gte", 0)), name="checkout_total_non_negative"
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("payment_state", "pending"), ("paid_at__isnull", False), _connector="OR"),
                        name="checkout_paid_has_paid_at",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("finalization_state", "open"),
                            models.Q(("finalized_at__isnull", False), ("payment_state", "paid")),
                            _connector="OR",
                        ),
                        name="checkout_finalized_requires_paid",
                    ),
                ],
            },
        ),
    ]
