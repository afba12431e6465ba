"""Factories for user creation payloads and API responses."""

import factory
from faker import Faker

fake = Faker()


class UserPayloadFactory(factory.Factory):
    """Factory for POST /users request bodies.

    Usage:
        payload = UserPayloadFactory()
        payload = UserPayloadFactory(role="admin")
        payloads = UserPayloadFactory.build_batch(5)
    """

    class Meta:
        model = dict

    name = factory.LazyFunction(lambda: fake.name())
    email = factory.LazyFunction(lambda: fake.unique.email())
    role = factory.LazyFunction(lambda: fake.random_element(["viewer", "editor", "admin"]))

    class Params:
        """Factory traits for common scenarios."""

        admin = factory.Trait(role="admin")


class UserResponseFactory(UserPayloadFactory):
    """Factory for the body the API returns after creating a user."""

    id = factory.Sequence(lambda n: str(n + 1))
