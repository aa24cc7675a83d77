"""
LGPD Assessment Constants

Static configuration consumed by value across the engine: answer
vocabulary, sector taxonomy and evidence upload limits.
NO hardcoded values in business logic.
"""

from typing import Dict, FrozenSet, List

# Answer vocabulary (compared after NFC normalization + casefold)
FULL_COMPLIANCE_ANSWER = "sim"
PARTIAL_COMPLIANCE_ANSWER = "parcial"
NEGATIVE_RESPONSES: FrozenSet[str] = frozenset({"não", "nao", "nao-sei"})

# Evidence marker matching any non-empty answer
ANY_ANSWER = "*"

# Point schedule
FULL_COMPLIANCE_POINTS = 10
PARTIAL_COMPLIANCE_POINTS = 5
MIN_SCORE_CAP = 100

BASE_SECTOR = "base"
CUSTOM_SECTOR = "custom"

# Closed sector taxonomy: display name -> sector key
SECTOR_TAXONOMY: Dict[str, str] = {
    "Recursos Humanos": "rh",
    "Finanças": "financas",
    "Marketing": "marketing",
    "Vendas": "vendas",
    "Tecnologia da Informação": "ti",
    "Atendimento ao Cliente": "atendimento",
}

SECTOR_DISPLAY_NAMES: Dict[str, str] = {key: name for name, key in SECTOR_TAXONOMY.items()}

# Custom sector questions are numbered from this offset by list position
CUSTOM_SECTOR_ID_OFFSET = 700

# Evidence documents
MAX_DOCUMENT_SIZE = 10 * 1024 * 1024  # 10,485,760 bytes

ALLOWED_DOCUMENT_EXTENSIONS: Dict[str, List[str]] = {
    "application/pdf": ["pdf"],
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ["docx"],
    "application/msword": ["doc"],
    "image/jpeg": ["jpg", "jpeg"],
    "image/png": ["png"],
    "image/gif": ["gif"],
}

ALLOWED_DOCUMENT_TYPES: FrozenSet[str] = frozenset(ALLOWED_DOCUMENT_EXTENSIONS)
