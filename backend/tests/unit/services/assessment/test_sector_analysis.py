"""
Unit tests for the sector compliance analyzer.
"""

import pytest

from privacywatch.models import OrganizationProfile, parse_answers
from privacywatch.services.assessment import analyze, compose
from privacywatch.services.assessment.sector_analysis import (
    BASE_SLICE_NAME,
    CUSTOM_SLICE_NAME,
    SECTOR_RECOMMENDATIONS,
)


def _catalog_and_answers(profile, overrides):
    catalog = compose(profile)
    raw = [overrides.get(q.id) for q in catalog]
    return catalog, parse_answers(raw, catalog)


@pytest.mark.unit
class TestAnalyze:
    """Test per-sector sub-scores, gaps and recommendations."""

    def test_base_slice_always_present(self) -> None:
        catalog, answers = _catalog_and_answers(None, {1: "sim", 2: "não"})
        result = analyze(answers, catalog, [])

        assert set(result) == {"base"}
        base = result["base"]
        assert base.name == BASE_SLICE_NAME
        assert base.total_count == 29
        assert base.answered_count == 2
        assert base.score == 50
        assert base.recommendations == []

    def test_sector_score_divides_by_answered(self) -> None:
        profile = OrganizationProfile(organization_id="org-1", sectors=["Recursos Humanos"])
        catalog, answers = _catalog_and_answers(profile, {101: "Formulário impresso", 103: "parcial"})
        rh = analyze(answers, catalog, profile.sectors)["rh"]

        # 5 points over 2 answered questions
        assert rh.score == 25
        assert rh.answered_count == 2
        assert rh.total_count == 4
        assert rh.name == "Recursos Humanos"
        assert rh.recommendations == SECTOR_RECOMMENDATIONS["rh"]

    def test_gaps_for_partial_and_negative(self) -> None:
        profile = OrganizationProfile(organization_id="org-1", sectors=["Tecnologia da Informação"])
        catalog, answers = _catalog_and_answers(profile, {501: "parcial", 503: "não", 504: "sim"})
        ti = analyze(answers, catalog, profile.sectors)["ti"]

        prompts = {q.id: q.prompt for q in catalog}
        assert ti.gaps == [
            f"Implementação parcial: {prompts[501]}",
            f"Não implementado: {prompts[503]}",
        ]
        assert ti.score == 50

    def test_sector_without_answers_scores_zero(self) -> None:
        profile = OrganizationProfile(organization_id="org-1", sectors=["Vendas"])
        catalog, answers = _catalog_and_answers(profile, {})
        vendas = analyze(answers, catalog, profile.sectors)["vendas"]
        assert vendas.score == 0
        assert vendas.answered_count == 0

    def test_custom_bucket(self) -> None:
        profile = OrganizationProfile(organization_id="org-1", custom_sectors=["Logística", "Frota"])
        catalog, answers = _catalog_and_answers(profile, {700: "não"})
        result = analyze(answers, catalog, profile.sectors + profile.custom_sectors)

        custom = result["custom"]
        assert custom.name == CUSTOM_SLICE_NAME
        assert custom.total_count == 2
        assert custom.answered_count == 1
        assert len(custom.gaps) == 2
        assert custom.gaps[1].startswith("Sem resposta:")
        assert custom.recommendations == SECTOR_RECOMMENDATIONS["custom"]

    def test_unknown_sector_name_without_custom_questions(self) -> None:
        catalog, answers = _catalog_and_answers(None, {})
        result = analyze(answers, catalog, ["Jurídico"])
        assert set(result) == {"base"}
