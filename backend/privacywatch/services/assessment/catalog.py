"""
Question Catalog Composer

Builds the questionnaire an organization answers: the base catalog, then the
extensions of every declared sector, then one generic question per custom
sector. The result is a pure function of the profile.
"""

import logging
from typing import List, Optional

from ...constants import CUSTOM_SECTOR, CUSTOM_SECTOR_ID_OFFSET, SECTOR_TAXONOMY
from ...models import OrganizationProfile, Question
from ...repositories import ProfileStore
from ...utils.logging_security import sanitize_for_log, sanitize_id_for_log
from .questions import BASE_QUESTIONS, SECTOR_QUESTIONS, custom_sector_question

logger = logging.getLogger(__name__)


def sector_key(sector_name: str) -> str:
    """Map a taxonomy display name to its key; anything else is 'custom'."""
    return SECTOR_TAXONOMY.get(sector_name, CUSTOM_SECTOR)


def base_catalog() -> List[Question]:
    return list(BASE_QUESTIONS)


def compose(profile: Optional[OrganizationProfile]) -> List[Question]:
    """
    Compose the catalog for an organization profile.

    Order:
    1. Base questions (ids 1-29)
    2. Each declared sector's extension, in the order the sectors are declared
    3. One free-text question per custom sector, id 700 + position

    Sectors outside the taxonomy contribute no questions. A sector declared
    twice is only extended once.

    Args:
        profile: Organization profile, or None for the base catalog

    Returns:
        List of questions with unique ids
    """
    catalog = base_catalog()
    if profile is None:
        return catalog

    seen_keys = set()
    for sector_name in profile.sectors:
        key = sector_key(sector_name)
        if key in seen_keys or key not in SECTOR_QUESTIONS:
            continue
        seen_keys.add(key)
        catalog.extend(SECTOR_QUESTIONS[key])

    for index, custom_name in enumerate(profile.custom_sectors):
        catalog.append(custom_sector_question(index, custom_name, CUSTOM_SECTOR_ID_OFFSET))

    return catalog


def compose_for_organization(organization_id: str, profile_store: ProfileStore) -> List[Question]:
    """
    Compose the catalog for an organization, looking up its profile.

    Falls back to the base catalog when the profile is missing or the lookup
    fails; the failure is logged and never propagated.
    """
    try:
        profile = profile_store.get_profile(organization_id)
    except Exception as e:
        logger.warning(
            "Profile lookup failed for %s, using base catalog: %s",
            sanitize_id_for_log(organization_id),
            sanitize_for_log(e),
        )
        return base_catalog()

    if profile is None:
        logger.info("No profile for %s, using base catalog", sanitize_id_for_log(organization_id))
        return base_catalog()

    return compose(profile)


def sector_questions(key: str) -> List[Question]:
    """Extension questions registered for a sector key (empty for unknown keys)."""
    return list(SECTOR_QUESTIONS.get(key, ()))
