"""Admin registration for catalog models."""

from django.contrib import admin

from .models import Product, ProductImage


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "brand", "category", "price", "count_in_stock", "is_published")
    search_fields = ("name", "brand")
    list_filter = ("category", "is_published")
    inlines = [ProductImageInline]
