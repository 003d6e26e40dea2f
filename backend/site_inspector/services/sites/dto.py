from __future__ import annotations

from dataclasses import dataclass

from site_inspector.models.site import Site


@dataclass(frozen=True, slots=True)
class SiteOut:
    id: int
    name: str
    code: str
    location: str | None
    address: str | None
    status: str

    @classmethod
    def from_model(cls, site: Site) -> SiteOut:
        return cls(
            id=site.id,
            name=site.name,
            code=site.code,
            location=site.location,
            address=site.address,
            status=site.status.value,
        )
