import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PcBuild",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, max_length=1000)),
                ("is_public", models.BooleanField(db_index=True, default=False)),
                (
                    "build_type",
                    models.CharField(
                        choices=[
                            ("gaming", "Gaming"),
                            ("workstation", "Workstation"),
                            ("budget", "Budget"),
                            ("high-end", "High-end"),
                            ("custom", "Custom"),
                        ],
                        default="custom",
                        max_length=16,
                    ),
                ),
                (
                    "compatibility_status",
                    models.CharField(
                        choices=[
                            ("compatible", "Compatible"),
                            ("incompatible", "Incompatible"),
                            ("needs_review", "Needs review"),
                        ],
                        default="needs_review",
                        max_length=16,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pc_builds",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "created_at"], name="builds_pcbu_user_id_faeefc_idx"),
                    models.Index(fields=["is_public", "build_type"], name="builds_pcbu_is_publ_2324b0_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PcBuildComponent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("cpu", "CPU"),
                            ("gpu", "GPU"),
                            ("ram", "RAM"),
                            ("storage", "Storage"),
                            ("motherboard", "Motherboard"),
                            ("psu", "Power supply"),
                            ("case", "Case"),
                            ("cooling", "Cooling"),
                            ("monitor", "Monitor"),
                            ("keyboard", "Keyboard"),
                            ("mouse", "Mouse"),
                            ("headset", "Headset"),
                        ],
                        max_length=16,
                    ),
                ),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("notes", models.CharField(blank=True, max_length=500)),
                (
                    "build",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="components", to="builds.pcbuild"
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="build_components",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)), name="build_component_quantity_positive"
                    )
                ],
            },
        ),
    ]
