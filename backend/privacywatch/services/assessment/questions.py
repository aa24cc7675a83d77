"""
LGPD Question Bank

Static base questionnaire (ids 1-29) and per-sector extensions keyed by the
sector taxonomy key. Evidence markers:
    evidence_if_answer="sim"  -> affirmative answer calls for a supporting document
    evidence_if_answer="*"    -> any non-empty answer calls for a supporting document
"""

from typing import Dict, Tuple

from ...constants import ANY_ANSWER, BASE_SECTOR, CUSTOM_SECTOR
from ...models import AnswerKind, Question

YES_NO = ["sim", "não"]
YES_NO_PARTIAL = ["sim", "não", "parcial"]

_DESC_YES_NO = "alternativa - sim/não; não requer documento anexado obrigatório"
_DESC_OPTIONS = "alternativa - seleção de opções listadas; não requer documento anexado obrigatório"
_DESC_MULTI = "alternativa - seleção múltipla de opções listadas; não requer documento anexado obrigatório"

PERSONAL_DATA_CATEGORIES = [
    "Nome", "Sobrenome", "Assinatura", "Apenas iniciais", "Idade", "Data e Local de nascimento", "Gênero",
    "Certidão de Nascimento", "Altura", "Peso", "Nacionalidade", "Naturalidade", "Estado Civil",
    "Lazer e interesses", "Fotografias", "Gravação de voz", "Número de filhos", "Raça ou Origem Étnica",
    "Histórico/ vida sexual", "Dado biométrico (identificar)", "Nome da Mãe", "Nome do Pai", "CPF", "RG",
    "CNH", "CTPS", "Dados de crianças e adolescentes", "Carteira SUS", "Bolsa família", "Número de passaporte",
    "Visto de entrada em outros países", "PIS/PASEP", "Endereço residencial", "Telefone residencial",
    "Número de fax residencial", "E-mail pessoal", "Número de celular pessoal", "Mídias sociais",
    "Diplomas e escolaridade", "Licenças e associação profissional", "Histórico acadêmico", "Ocupação/Cargo",
    "Endereço comercial", "Telefone comercial", "Fax comercial", "E-mail comercial", "Celular comercial",
    "Número de Identificação do Empregador", "Exame médico admissional", "Exame médico periódico",
    "Exame médico demissional", "Carta de referência", "Número de Identificação do de pagamento de imposto de renda",
    "Reivindicações/reclamações do funcionário dentro da instituição",
    "Histórico empregatício declarado pelo funcionário",
    "Histórico empregatício obtido através de análise/troca de informações com empresas fora da empresa",
    "Dados bancários", "Dados de PIX", "Histórico de transações financeiras", "Score de crédito",
    "Histórico do uso de seguro", "Salário e outros rendimentos", "Dados de renda familiar mensal e patrimônio",
    "Antecedentes criminais", "Processos em andamento/concluídos envolvendo o titular",
    "Crenças religiosas ou filosóficas", "Posicionamento político", "Filiação sindical", "Filiação política",
    "Orientação sexual", "Preferência de compra", "Preferências de navegação na internet",
    "Perfil comportamental", "Informações sobre dispositivos móveis", "Geolocalização", "Áudio/Vídeo",
    "Informações no calendário", "Registro de ligações", "Contatos/Agenda", "Mensagens de texto (conteúdo)",
    "E-mail (conteúdo)", "Identificador único de dispositivo (IMEI)", "Endereço de IP",
    "Clickstream/rastreamento de website", "Modelo do aparelho/versão do sistema operacional do dispositivo",
    "Senha de acesso ao dispositivo", "MAC address /ou número de série", "Número do cartão",
    "Nome do titular do cartão", "Data de validade", "Número, CVV, CVC2, CID", "Senha",
    "Número de registro médico", "Número de beneficiário no plano de saúde", "Tratamento médico",
    "Diagnóstico médico", "Reembolsos médicos", "Histórico médico", "Dados de reclamações médicas",
    "Número de prescrição médica", "Histórico de saúde familiar ou morbidade", "Informações genéticas",
    "Dados de veículo", "origem racial ou étnica", "convicção religiosa", "opinião política",
    "filiação a sindicato", "organização de caráter religioso, filosófico ou político",
    "dado referente à saúde", "Dado referente à vida sexual", "dado genético ou biométrico", "Outros",
]

LEGAL_BASES = [
    "Mediante consentimento do titular",
    "Cumprimento de obrigação legal pelo controlador;",
    "Cumprimento de obrigação regulatória pelo controlador;",
    "Pela administração pública, para o tratamento e uso compartilhado de dados necessários à execução de "
    "políticas públicas previstas em leis e regulamentos ou respaldadas em contratos, convênios ou "
    "instrumentos congêneres, observadas as disposições do Capítulo IV desta Lei;",
    "Para a realização de estudos por órgão de pesquisa",
    "Execução de contrato",
    "Execução de procedimentos preliminares relacionados a contrato",
    "Para o exercício regular de direitos em processo judicial, administrativo ou arbitral",
    "Para a proteção da vida ou da incolumidade física do titular ou de terceiro;",
    "Para a tutela da saúde",
    "Interesses legítimos do controlador ou de terceiro",
    "Para a proteção do crédito",
    "Garantia da prevenção à fraude e à segurança do titular, nos processos de identificação e "
    "autenticação de cadastro em sistemas eletrônicos",
]


def _single(qid, prompt, options, description, sector=BASE_SECTOR, evidence=None) -> Question:
    return Question(
        id=qid,
        prompt=prompt,
        kind=AnswerKind.SINGLE,
        options=options,
        sector=sector,
        requires_evidence=evidence is not None,
        evidence_if_answer=evidence,
        description=description,
    )


def _multiple(qid, prompt, options, description, sector=BASE_SECTOR) -> Question:
    return Question(
        id=qid, prompt=prompt, kind=AnswerKind.MULTIPLE, options=options, sector=sector, description=description
    )


def _text(qid, prompt, description, sector=BASE_SECTOR, evidence=None) -> Question:
    return Question(
        id=qid,
        prompt=prompt,
        kind=AnswerKind.TEXT,
        sector=sector,
        requires_evidence=evidence is not None,
        evidence_if_answer=evidence,
        description=description,
    )


# ============================================================================
# Base questionnaire
# ============================================================================

BASE_QUESTIONS: Tuple[Question, ...] = (
    _single(
        1,
        "A empresa possui uma política de privacidade documentada e atualizada?",
        YES_NO_PARTIAL,
        "Política de privacidade - documento será solicitado via tarefa",
        evidence="sim",
    ),
    _single(
        2,
        "Existe um responsável designado para questões de proteção de dados (DPO ou equivalente)?",
        YES_NO,
        _DESC_YES_NO,
    ),
    _single(
        3,
        "A empresa realiza mapeamento dos dados pessoais que coleta e processa?",
        YES_NO_PARTIAL,
        "Mapeamento de dados - documento será solicitado via tarefa",
        evidence="sim",
    ),
    _single(
        4,
        "A empresa possui procedimento para atender solicitações dos titulares (acesso, correção, exclusão)?",
        YES_NO_PARTIAL,
        "Procedimento de solicitações - documento será solicitado via tarefa",
        evidence="sim",
    ),
    _multiple(5, "Quais dos dados abaixo são utilizados nesse tratamento de dados?", PERSONAL_DATA_CATEGORIES, _DESC_MULTI),
    _text(6, "Por qual motivo os dados são coletados?", "dissertativa; não requer documento anexado obrigatório"),
    _single(7, "Em qual hipótese prevista na LGPD os dados são coletados?", LEGAL_BASES, _DESC_OPTIONS),
    _multiple(
        8,
        "Quem é o titular dos dados coletados?",
        ["Sócio", "Colaborador", "Fornecedor", "Cliente", "Visitante", "Outros"],
        _DESC_MULTI,
    ),
    _single(
        9,
        "Durante o mês quantas vezes os dados são coletados para essa finalidade?",
        ["Até 25", "De 25 a 50", "De 51 a 100", "de 101 a 200", "Mais de 200"],
        _DESC_OPTIONS,
    ),
    _single(
        10,
        "Se o dado é utilizado com base no consentimento, a empresa solicita formalmente o consentimento do titular?",
        ["sim", "não", "Esse processo não está baseado no consentimento"],
        "Processo de consentimento - documento será solicitado via tarefa",
        evidence="sim",
    ),
    _multiple(
        11,
        "Como os dados são coletados?",
        [
            "Formulário no site",
            "Formulário em aplicativo",
            "Formulário físico",
            "whatsapp ou similares",
            "e-mail",
            "telefone",
            "Enviado por outra empresa cliente",
            "Enviado por outra empresa não cliente",
            "Comprado de outra empresa",
            "Enviado por outra área da empresa",
            "Dados armazenados previamente em sistema",
        ],
        _DESC_MULTI,
    ),
    _single(12, "Outras áreas da empresa possuem acesso aos mesmos dados?", YES_NO, _DESC_YES_NO),
    _single(13, "A área compartilha os dados com empresas externas?", YES_NO, _DESC_YES_NO),
    _single(
        14,
        "No caso de resposta positiva ao item 13, o compartilhamento é informado ao titular?",
        YES_NO,
        "Notificação de compartilhamento - documento será solicitado via tarefa",
        evidence="sim",
    ),
    _single(15, "Como os dados são armazenados?", ["Formato Digital", "Formato físico"], _DESC_OPTIONS),
    _single(16, "Se for em formato físico, os dados ficam armazenados em arquivos?", YES_NO, _DESC_YES_NO),
    _single(17, "Em caso positivo o arquivo físico fica localizado em sala com controle de acesso?", YES_NO, _DESC_YES_NO),
    _single(18, "O arquivo físico é chaveado?", YES_NO, _DESC_YES_NO),
    _single(19, "Se for em formato digital, os arquivos ficam armazenados em nuvem?", YES_NO, _DESC_YES_NO),
    _text(
        20,
        "Em caso positivo qual o provedor de nuvem utilizado:",
        "Provedor de nuvem - documento será solicitado via tarefa",
        evidence=ANY_ANSWER,
    ),
    _single(21, "Se for em formato digital, os arquivos ficam armazenados em sistemas?", YES_NO, _DESC_YES_NO),
    _text(
        22,
        "Em caso positivo de armazenamento de sistema, qual o nome do sistema e a empresa que o fornece? "
        "(incluir o site da empresa)",
        "Sistema de armazenamento - documento será solicitado via tarefa",
        evidence=ANY_ANSWER,
    ),
    _single(
        23,
        "Os dados são compartilhados ou arquivados com empresas ou provedores localizados em território estrangeiro?",
        YES_NO,
        "Transferência internacional - documento será solicitado via tarefa",
        evidence="sim",
    ),
    _single(24, "A área utiliza dispositivo móvel de armazenamento de dados?", YES_NO, _DESC_YES_NO),
    _single(25, "A área realiza backups dos dados que utiliza?", YES_NO, _DESC_YES_NO),
    _single(
        26,
        "Por quanto tempo os dados são armazenados?",
        ["Tempo indefinido", "Até 1 ano", "Até 5 anos", "Até 10 anos", "Até 20 anos"],
        _DESC_OPTIONS,
    ),
    _single(27, "O dado pessoal é submetido a decisão automatizada durante o processo?", YES_NO, _DESC_YES_NO),
    _single(
        28,
        "O dado pessoal é utilizado em campanhas de marketing ou para finalidades diferente da informada?",
        YES_NO,
        _DESC_YES_NO,
    ),
    _single(29, "O dado pessoal é revisado periodicamente?", YES_NO, _DESC_YES_NO),
)


# ============================================================================
# Sector extensions (keyed by sector key, in registration order)
# ============================================================================

SECTOR_QUESTIONS: Dict[str, Tuple[Question, ...]] = {
    "rh": (
        _text(
            101,
            "Como a empresa coleta e armazena dados dos funcionários durante o processo de contratação?",
            "Descreva os procedimentos de coleta de dados no processo seletivo. Documento será solicitado via tarefa.",
            sector="rh",
            evidence=ANY_ANSWER,
        ),
        _multiple(
            102,
            "Quais dados biométricos são coletados dos funcionários, se houver?",
            ["Impressão digital", "Reconhecimento facial", "Íris", "Voz", "Nenhum", "Outros"],
            "Selecione todas as opções aplicáveis",
            sector="rh",
        ),
        _single(
            103,
            "A empresa possui consentimento explícito para processamento de dados sensíveis dos funcionários "
            "(saúde, origem racial, etc.)?",
            YES_NO_PARTIAL,
            "Consentimento para dados sensíveis - documento será solicitado via tarefa",
            sector="rh",
            evidence="sim",
        ),
        _text(
            104,
            "Como é realizado o controle de acesso aos dados dos funcionários?",
            "Descreva os mecanismos de controle de acesso",
            sector="rh",
        ),
    ),
    "financas": (
        _text(
            201,
            "Como são protegidos os dados financeiros dos clientes (contas bancárias, cartões, etc.)?",
            "Descreva as medidas de proteção. Documento será solicitado via tarefa.",
            sector="financas",
            evidence=ANY_ANSWER,
        ),
        _single(
            202,
            "A empresa possui certificação de segurança para processamento de pagamentos?",
            YES_NO,
            "Certificação de segurança - documento será solicitado via tarefa",
            sector="financas",
            evidence="sim",
        ),
        _multiple(
            203,
            "Quais dados financeiros são compartilhados com terceiros?",
            ["CPF", "Dados bancários", "Histórico de transações", "Score de crédito", "Nenhum", "Outros"],
            "Selecione todas as opções aplicáveis",
            sector="financas",
        ),
        _single(
            204,
            "Por quanto tempo os dados financeiros são armazenados?",
            ["Até 5 anos", "5-10 anos", "Mais de 10 anos", "Indefinidamente"],
            "Selecione o período de retenção",
            sector="financas",
        ),
    ),
    "marketing": (
        _text(
            301,
            "Como é obtido o consentimento para envio de comunicações de marketing?",
            "Descreva o processo de obtenção de consentimento. Documento será solicitado via tarefa.",
            sector="marketing",
            evidence=ANY_ANSWER,
        ),
        _single(
            302,
            "A empresa possui mecanismo para opt-out de comunicações de marketing?",
            YES_NO,
            _DESC_YES_NO,
            sector="marketing",
        ),
        _multiple(
            303,
            "Quais dados são utilizados para segmentação de campanhas de marketing?",
            [
                "Dados demográficos",
                "Comportamento de compra",
                "Localização",
                "Preferências",
                "Dados de redes sociais",
                "Outros",
            ],
            "Selecione todas as opções aplicáveis",
            sector="marketing",
        ),
        _single(
            304,
            "São utilizados cookies ou tecnologias de rastreamento no site/app da empresa?",
            YES_NO_PARTIAL,
            "Política de cookies - documento será solicitado via tarefa",
            sector="marketing",
            evidence="sim",
        ),
    ),
    "vendas": (
        _text(
            401,
            "Como são coletados e armazenados os dados dos leads/prospects?",
            "Descreva o processo de coleta e armazenamento",
            sector="vendas",
        ),
        _text(
            402,
            "A empresa possui CRM? Como os dados dos clientes são protegidos nele?",
            "Descreva as medidas de proteção no CRM. Documento será solicitado via tarefa.",
            sector="vendas",
            evidence=ANY_ANSWER,
        ),
        _single(
            403,
            "Os vendedores têm acesso a dados pessoais sensíveis dos clientes?",
            YES_NO_PARTIAL,
            "alternativa - sim/não/parcial; não requer documento anexado obrigatório",
            sector="vendas",
        ),
    ),
    "ti": (
        _single(
            501,
            "Existe política de segurança da informação documentada e implementada?",
            YES_NO_PARTIAL,
            "Política de segurança - documento será solicitado via tarefa",
            sector="ti",
            evidence="sim",
        ),
        _text(
            502,
            "Como são realizados os backups dos dados pessoais?",
            "Descreva a política e procedimentos de backup",
            sector="ti",
        ),
        _single(
            503,
            "A empresa possui plano de resposta a incidentes de segurança?",
            YES_NO_PARTIAL,
            "Plano de resposta - documento será solicitado via tarefa",
            sector="ti",
            evidence="sim",
        ),
        _single(
            504,
            "São realizadas auditorias de segurança regularmente?",
            YES_NO_PARTIAL,
            "alternativa - sim/não/parcial; não requer documento anexado obrigatório",
            sector="ti",
        ),
    ),
    "atendimento": (
        _text(
            601,
            "Como são tratadas as solicitações dos titulares sobre seus dados pessoais (acesso, correção, exclusão)?",
            "Descreva o processo de atendimento às solicitações. Documento será solicitado via tarefa.",
            sector="atendimento",
            evidence=ANY_ANSWER,
        ),
        _single(
            602,
            "Existe canal específico para solicitações relacionadas à LGPD?",
            YES_NO,
            _DESC_YES_NO,
            sector="atendimento",
        ),
        _single(
            603,
            "Os atendentes são treinados sobre proteção de dados pessoais?",
            YES_NO_PARTIAL,
            "Certificados de treinamento - documento será solicitado via tarefa",
            sector="atendimento",
            evidence="sim",
        ),
    ),
}


def custom_sector_question(index: int, sector_name: str, id_offset: int) -> Question:
    """Generic free-text question for a custom sector at list position index."""
    return _text(
        id_offset + index,
        f'Como o setor "{sector_name}" coleta e processa dados pessoais?',
        "Descreva os processos de tratamento de dados específicos deste setor",
        sector=CUSTOM_SECTOR,
    )
