"""PC build models.

A build is a named set of catalog products, one per component slot, owned
by a user and optionally shared publicly. Its price is never stored here;
it is derived from the current product prices by `builds.pricing`.
"""

from common.choices import BuildType, CompatibilityStatus, ComponentCategory
from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class PcBuild(TimeStampedModel):
    """A user's custom PC configuration."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="pc_builds", on_delete=models.CASCADE)
    name = models.CharField(max_length=100)
    description = models.TextField(max_length=1000, blank=True)
    is_public = models.BooleanField(default=False, db_index=True)
    build_type = models.CharField(max_length=16, choices=BuildType.choices, default=BuildType.CUSTOM)
    compatibility_status = models.CharField(
        max_length=16, choices=CompatibilityStatus.choices, default=CompatibilityStatus.NEEDS_REVIEW
    )

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"]),
            models.Index(fields=["is_public", "build_type"]),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"PcBuild#{self.id} {self.name}"


class PcBuildComponent(TimeStampedModel):
    """A product placed in one slot of a build.

    `product` becomes NULL when the catalog product is deleted; such a
    component is treated as unresolved and contributes nothing to the price.
    """

    build = models.ForeignKey(PcBuild, related_name="components", on_delete=models.CASCADE)
    product = models.ForeignKey(
        "catalog.Product", related_name="build_components", null=True, blank=True, on_delete=models.SET_NULL
    )
    category = models.CharField(max_length=16, choices=ComponentCategory.choices)
    quantity = models.PositiveIntegerField(default=1)
    notes = models.CharField(max_length=500, blank=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(name="build_component_quantity_positive", condition=models.Q(quantity__gte=1)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.category} x{self.quantity} (build={self.build_id})"
