from decimal import Decimal

import factory
from catalog.models import Product, ProductImage
from common.choices import ComponentCategory
from factory import Faker
from factory.django import DjangoModelFactory


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    name = Faker("sentence", nb_words=3)
    brand = Faker("company")
    category = ComponentCategory.CPU
    description = Faker("paragraph")
    price = Decimal("100000.00")
    count_in_stock = 10
    is_published = True

    @factory.post_generation
    def image_urls(self, create, extracted, **kwargs):
        if not create or not extracted:
            return
        for idx, url in enumerate(extracted):
            ProductImage.objects.create(product=self, url=url, sort_order=idx)


class ProductImageFactory(DjangoModelFactory):
    class Meta:
        model = ProductImage

    product = factory.SubFactory(ProductFactory)
    url = Faker("image_url")
    alt_text = Faker("sentence")
    sort_order = 0
