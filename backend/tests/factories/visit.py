"""Factory Boy definition for :class:`site_inspector.models.visit.Visit`."""

from __future__ import annotations

import factory

from site_inspector.models.visit import Visit, VisitPriority, VisitStatus, VisitType
from tests.factories import BaseFactory
from tests.factories.site import SiteFactory
from tests.factories.user import UserFactory


class VisitFactory(BaseFactory):
    """
    Build persisted visits.

    ``site`` and ``user`` are factory parameters; pass existing instances to
    attach the visit to them, otherwise fresh ones are created.
    """

    class Meta:
        model = Visit
        exclude = ("site", "user")

    id = None
    site = factory.SubFactory(SiteFactory)
    user = factory.SubFactory(UserFactory)
    site_id = factory.SelfAttribute("site.id")
    user_id = factory.SelfAttribute("user.id")
    status = VisitStatus.PENDING
    priority = VisitPriority.MEDIUM
    type = VisitType.ROUTINE
    notes = factory.Faker("sentence")
