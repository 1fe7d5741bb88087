"""Shared enumerations and choices used across apps."""

from django.db import models


class UserRole(models.TextChoices):
    CUSTOMER = "customer", "Customer"
    ADMIN = "admin", "Admin"


class ComponentCategory(models.TextChoices):
    """Slots a product can fill inside a PC build."""

    CPU = "cpu", "CPU"
    GPU = "gpu", "GPU"
    RAM = "ram", "RAM"
    STORAGE = "storage", "Storage"
    MOTHERBOARD = "motherboard", "Motherboard"
    PSU = "psu", "Power supply"
    CASE = "case", "Case"
    COOLING = "cooling", "Cooling"
    MONITOR = "monitor", "Monitor"
    KEYBOARD = "keyboard", "Keyboard"
    MOUSE = "mouse", "Mouse"
    HEADSET = "headset", "Headset"


class BuildType(models.TextChoices):
    GAMING = "gaming", "Gaming"
    WORKSTATION = "workstation", "Workstation"
    BUDGET = "budget", "Budget"
    HIGH_END = "high-end", "High-end"
    CUSTOM = "custom", "Custom"


class CompatibilityStatus(models.TextChoices):
    COMPATIBLE = "compatible", "Compatible"
    INCOMPATIBLE = "incompatible", "Incompatible"
    NEEDS_REVIEW = "needs_review", "Needs review"


class PaymentState(models.TextChoices):
    """Payment lifecycle of a checkout session. Only moves forward."""

    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"


class FinalizationState(models.TextChoices):
    """Whether a checkout session has been converted into an order."""

    OPEN = "open", "Open"
    FINALIZED = "finalized", "Finalized"


class DeliveryState(models.TextChoices):
    """Delivery status of an order, controlled by staff."""

    PENDING = "pending", "Pending"
    DELIVERED = "delivered", "Delivered"
