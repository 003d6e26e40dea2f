"""Factory Boy definition for :class:`site_inspector.models.site.Site`."""

from __future__ import annotations

import factory

from site_inspector.models.site import Site, SiteStatus
from tests.factories import BaseFactory


class SiteFactory(BaseFactory):
    class Meta:
        model = Site

    id = None
    name = factory.Sequence(lambda n: f"Tower {n}")
    code = factory.Sequence(lambda n: f"SITE-{n:04d}")
    location = factory.Faker("city")
    address = factory.Faker("street_address")
    status = SiteStatus.ACTIVE
