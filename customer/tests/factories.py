import factory
from customer.models import Customer, CustomerProfile
from factory.django import DjangoModelFactory


class CustomerFactory(DjangoModelFactory):
    class Meta:
        model = Customer

    email = factory.Sequence(lambda n: f"customer{n}@example.com")
    full_name = factory.Faker("name")
    is_active = True
    is_profile_complete = True


class CustomerProfileFactory(DjangoModelFactory):
    class Meta:
        model = CustomerProfile

    customer = factory.SubFactory(CustomerFactory)
    phone = factory.Sequence(lambda n: f"9180000{n:05d}")
    photo_url = "https://cdn.example.com/customer.jpg"
