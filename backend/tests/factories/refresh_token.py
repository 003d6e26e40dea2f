"""Factory Boy definition for :class:`site_inspector.models.refresh_token.RefreshToken`."""

from __future__ import annotations

from datetime import timedelta

import factory

from site_inspector.models.base import utcnow
from site_inspector.models.refresh_token import RefreshToken
from site_inspector.services.tokens.service import hash_token
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class RefreshTokenFactory(BaseFactory):
    """
    Build persisted refresh-token rows.

    ``raw`` is the secret a client would present; only its digest is stored.
    """

    class Meta:
        model = RefreshToken
        exclude = ("user",)

    class Params:
        raw = factory.Sequence(lambda n: f"refresh-secret-{n}")
        lifetime = timedelta(days=7)

    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    token_hash = factory.LazyAttribute(lambda o: hash_token(o.raw))
    created_at = factory.LazyFunction(utcnow)
    expires_at = factory.LazyAttribute(lambda o: o.created_at + o.lifetime)
    is_revoked = False
