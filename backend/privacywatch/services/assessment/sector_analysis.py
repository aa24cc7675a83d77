"""
Sector Compliance Analyzer

Per-sector sub-scores, gaps and static recommendations over one answer set.
"""

from typing import Dict, List, Sequence, Tuple

from ...constants import (
    BASE_SECTOR,
    CUSTOM_SECTOR,
    FULL_COMPLIANCE_POINTS,
    SECTOR_DISPLAY_NAMES,
)
from ...models import AnswerBase, Question, SectorAnalysis
from .catalog import sector_key
from .scoring import answer_points

BASE_SLICE_NAME = "Conformidade Geral"
CUSTOM_SLICE_NAME = "Setores Personalizados"

SECTOR_RECOMMENDATIONS: Dict[str, List[str]] = {
    "rh": [
        "Implementar política de acesso restrito aos dados de funcionários",
        "Criar procedimento para coleta de consentimento de dados sensíveis",
        "Documentar processo de seleção e armazenamento de dados",
    ],
    "financas": [
        "Implementar criptografia para dados financeiros sensíveis",
        "Estabelecer política de retenção de dados financeiros",
        "Certificar-se em padrões de segurança para pagamentos (PCI DSS)",
    ],
    "marketing": [
        "Implementar mecanismo de opt-in/opt-out para comunicações",
        "Criar política de cookies e rastreamento",
        "Documentar processo de consentimento para marketing",
    ],
    "vendas": [
        "Implementar controle de acesso no CRM",
        "Criar política para coleta de dados de prospects",
        "Documentar processo de proteção de dados de clientes",
    ],
    "ti": [
        "Implementar política de segurança da informação",
        "Criar plano de resposta a incidentes",
        "Estabelecer rotina de auditorias de segurança",
    ],
    "atendimento": [
        "Criar canal específico para solicitações LGPD",
        "Treinar equipe sobre direitos dos titulares",
        "Documentar processo de atendimento às solicitações",
    ],
    CUSTOM_SECTOR: [
        "Documentar os processos de tratamento de dados pessoais do setor",
        "Mapear os dados pessoais coletados e compartilhados pelo setor",
        "Definir responsáveis pela proteção de dados no setor",
    ],
}


def _score_slice(pairs: Sequence[Tuple[Question, AnswerBase]], collect_gaps: bool) -> Tuple[int, int, List[str]]:
    """Return (sub-score, answered count, gaps). The sub-score divides by answered questions only."""
    points = 0
    answered = 0
    gaps: List[str] = []

    for question, answer in pairs:
        if not answer.is_answered:
            if collect_gaps and question.sector == CUSTOM_SECTOR:
                gaps.append(f"Sem resposta: {question.prompt}")
            continue
        answered += 1
        points += answer_points(answer)
        if not collect_gaps:
            continue
        if answer.is_partial_compliance:
            gaps.append(f"Implementação parcial: {question.prompt}")
        elif answer.is_negative:
            gaps.append(f"Não implementado: {question.prompt}")

    sub_score = round(points / (answered * FULL_COMPLIANCE_POINTS) * 100) if answered else 0
    return sub_score, answered, gaps


def analyze(
    answers: Sequence[AnswerBase], catalog: Sequence[Question], sectors: Sequence[str]
) -> Dict[str, SectorAnalysis]:
    """
    Analyze an answer set per sector.

    The base slice is always present. Declared taxonomy sectors with questions
    in the catalog get their own slice. Custom-sector questions (and any
    sector name outside the taxonomy) are reported together under 'custom'.

    Args:
        answers: Parsed answers aligned with catalog by position
        catalog: Catalog snapshot the answers were given against
        sectors: Declared sector display names

    Returns:
        Dict keyed by sector key ('base', 'rh', ..., 'custom')
    """
    pairs = list(zip(catalog, answers))

    by_sector: Dict[str, List[Tuple[Question, AnswerBase]]] = {}
    for question, answer in pairs:
        by_sector.setdefault(question.sector, []).append((question, answer))

    base_pairs = by_sector.get(BASE_SECTOR, [])
    base_score, base_answered, _ = _score_slice(base_pairs, collect_gaps=False)
    result: Dict[str, SectorAnalysis] = {
        BASE_SECTOR: SectorAnalysis(
            name=BASE_SLICE_NAME,
            score=base_score,
            answered_count=base_answered,
            total_count=len(base_pairs),
        )
    }

    for sector_name in sectors:
        key = sector_key(sector_name)
        if key == CUSTOM_SECTOR or key in result:
            continue
        slice_pairs = by_sector.get(key, [])
        if not slice_pairs:
            continue
        sub_score, answered, gaps = _score_slice(slice_pairs, collect_gaps=True)
        result[key] = SectorAnalysis(
            name=SECTOR_DISPLAY_NAMES.get(key, sector_name),
            score=sub_score,
            answered_count=answered,
            total_count=len(slice_pairs),
            gaps=gaps,
            recommendations=list(SECTOR_RECOMMENDATIONS[key]),
        )

    custom_pairs = by_sector.get(CUSTOM_SECTOR, [])
    if custom_pairs:
        sub_score, answered, gaps = _score_slice(custom_pairs, collect_gaps=True)
        result[CUSTOM_SECTOR] = SectorAnalysis(
            name=CUSTOM_SLICE_NAME,
            score=sub_score,
            answered_count=answered,
            total_count=len(custom_pairs),
            gaps=gaps,
            recommendations=list(SECTOR_RECOMMENDATIONS[CUSTOM_SECTOR]),
        )

    return result
