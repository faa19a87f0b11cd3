"""Profile lookup for scoring by id."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from models.schemas.profiles import CompanyProfile, EntityProfile


class ProfileNotFoundError(KeyError):
    """No profile with the requested id."""

    def __init__(self, kind: str, profile_id: str) -> None:
        super().__init__(profile_id)
        self.kind = kind
        self.profile_id = profile_id

    def __str__(self) -> str:
        return f"{self.kind} not found: {self.profile_id}"


class ProfileStore(ABC):
    """Read-only source of candidate, opportunity and company snapshots."""

    @abstractmethod
    def get_candidate(self, candidate_id: str) -> EntityProfile: ...

    @abstractmethod
    def get_opportunity(self, opportunity_id: str) -> EntityProfile: ...

    @abstractmethod
    def get_company(self, company_id: str) -> CompanyProfile: ...


class InMemoryProfileStore(ProfileStore):
    def __init__(
        self,
        candidates: Iterable[EntityProfile] = (),
        opportunities: Iterable[EntityProfile] = (),
        companies: Iterable[CompanyProfile] = (),
    ) -> None:
        self._candidates = {c.id: c for c in candidates}
        self._opportunities = {o.id: o for o in opportunities}
        self._companies = {c.id: c for c in companies}

    def add_candidate(self, profile: EntityProfile) -> None:
        self._candidates[profile.id] = profile

    def add_opportunity(self, profile: EntityProfile) -> None:
        self._opportunities[profile.id] = profile

    def add_company(self, company: CompanyProfile) -> None:
        self._companies[company.id] = company

    def get_candidate(self, candidate_id: str) -> EntityProfile:
        try:
            return self._candidates[candidate_id]
        except KeyError:
            raise ProfileNotFoundError("candidate", candidate_id) from None

    def get_opportunity(self, opportunity_id: str) -> EntityProfile:
        try:
            return self._opportunities[opportunity_id]
        except KeyError:
            raise ProfileNotFoundError("opportunity", opportunity_id) from None

    def get_company(self, company_id: str) -> CompanyProfile:
        try:
            return self._companies[company_id]
        except KeyError:
            raise ProfileNotFoundError("company", company_id) from None
