import factory
from builds.models import PcBuild, PcBuildComponent
from common.choices import ComponentCategory
from factory.django import DjangoModelFactory


class PcBuildFactory(DjangoModelFactory):
    class Meta:
        model = PcBuild

    user = factory.SubFactory("cart.tests.factories.UserFactory")
    name = factory.Faker("sentence", nb_words=2)
    description = factory.Faker("sentence")
    is_public = False


class PcBuildComponentFactory(DjangoModelFactory):
    class Meta:
        model = PcBuildComponent

    build = factory.SubFactory(PcBuildFactory)
    product = factory.SubFactory("catalog.tests.factories.ProductFactory")
    category = ComponentCategory.CPU
    quantity = 1
