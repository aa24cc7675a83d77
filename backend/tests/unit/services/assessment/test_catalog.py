"""
Unit tests for the question catalog composer.
"""

import pytest

from privacywatch.constants import CUSTOM_SECTOR
from privacywatch.models import AnswerKind, OrganizationProfile
from privacywatch.repositories import InMemoryProfileStore
from privacywatch.services.assessment import (
    base_catalog,
    compose,
    compose_for_organization,
    sector_key,
    sector_questions,
)


class FailingProfileStore(InMemoryProfileStore):
    def get_profile(self, organization_id):
        raise ConnectionError("profile database unavailable")


@pytest.mark.unit
class TestBaseCatalog:
    def test_has_29_questions_in_order(self) -> None:
        ids = [q.id for q in base_catalog()]
        assert ids == list(range(1, 30))

    def test_all_base_questions_tagged_base(self) -> None:
        assert {q.sector for q in base_catalog()} == {"base"}

    def test_select_questions_have_options(self) -> None:
        for question in base_catalog():
            if question.kind != AnswerKind.TEXT:
                assert question.options, f"question {question.id} has no options"


@pytest.mark.unit
class TestCompose:
    """Test catalog composition from an organization profile."""

    def test_no_profile_gives_base(self) -> None:
        assert compose(None) == base_catalog()

    def test_declared_sectors_appended_in_declaration_order(self) -> None:
        profile = OrganizationProfile(
            organization_id="org-1",
            sectors=["Tecnologia da Informação", "Recursos Humanos"],
        )
        ids = [q.id for q in compose(profile)]

        assert ids[:29] == list(range(1, 30))
        assert ids[29:] == [501, 502, 503, 504, 101, 102, 103, 104]

    def test_sector_declared_twice_extends_once(self) -> None:
        profile = OrganizationProfile(organization_id="org-1", sectors=["Marketing", "Marketing"])
        ids = [q.id for q in compose(profile)]
        assert len(ids) == len(set(ids))
        assert ids.count(301) == 1

    def test_unknown_sector_adds_nothing(self) -> None:
        profile = OrganizationProfile(organization_id="org-1", sectors=["Jurídico"])
        assert len(compose(profile)) == 29

    def test_custom_sectors_get_one_question_each(self) -> None:
        profile = OrganizationProfile(
            organization_id="org-1",
            sectors=["Vendas"],
            custom_sectors=["Logística", "Jurídico"],
        )
        catalog = compose(profile)
        custom = [q for q in catalog if q.sector == CUSTOM_SECTOR]

        assert [q.id for q in custom] == [700, 701]
        assert "Logística" in custom[0].prompt
        assert "Jurídico" in custom[1].prompt
        assert all(q.kind == AnswerKind.TEXT for q in custom)
        assert catalog[-2:] == custom

    def test_blank_custom_sectors_ignored(self) -> None:
        profile = OrganizationProfile(organization_id="org-1", custom_sectors=["", "  ", "Frota"])
        custom = [q for q in compose(profile) if q.sector == CUSTOM_SECTOR]
        assert [q.id for q in custom] == [700]

    def test_deterministic(self) -> None:
        profile = OrganizationProfile(
            organization_id="org-1",
            sectors=["Finanças", "Atendimento ao Cliente", "Marketing"],
            custom_sectors=["Frota"],
        )
        first = [(q.id, q.prompt) for q in compose(profile)]
        second = [(q.id, q.prompt) for q in compose(profile)]
        assert first == second

    def test_all_sectors_keep_ids_unique(self) -> None:
        profile = OrganizationProfile(
            organization_id="org-1",
            sectors=[
                "Recursos Humanos",
                "Finanças",
                "Marketing",
                "Vendas",
                "Tecnologia da Informação",
                "Atendimento ao Cliente",
            ],
            custom_sectors=["A", "B", "C"],
        )
        ids = [q.id for q in compose(profile)]
        assert len(ids) == len(set(ids))


@pytest.mark.unit
class TestComposeForOrganization:
    def test_uses_stored_profile(self) -> None:
        store = InMemoryProfileStore()
        store.save_profile(OrganizationProfile(organization_id="org-1", sectors=["Recursos Humanos"]))
        assert len(compose_for_organization("org-1", store)) == 33

    def test_missing_profile_falls_back_to_base(self) -> None:
        assert compose_for_organization("unknown", InMemoryProfileStore()) == base_catalog()

    def test_lookup_failure_falls_back_to_base(self) -> None:
        assert compose_for_organization("org-1", FailingProfileStore()) == base_catalog()


@pytest.mark.unit
class TestSectorKeys:
    def test_taxonomy_names(self) -> None:
        assert sector_key("Recursos Humanos") == "rh"
        assert sector_key("Tecnologia da Informação") == "ti"

    def test_unknown_name_is_custom(self) -> None:
        assert sector_key("Jurídico") == CUSTOM_SECTOR

    def test_sector_questions_unknown_key_is_empty(self) -> None:
        assert sector_questions("juridico") == []
        assert [q.id for q in sector_questions("atendimento")] == [601, 602, 603]
