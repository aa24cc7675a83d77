"""
Remediation Task Templates

Static library of LGPD remediation templates. Baseline templates are always
derived; trigger and evidence templates are selected by rules.py.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ...models import TaskPriority


@dataclass(frozen=True)
class TaskTemplate:
    """Blueprint for a remediation task"""

    key: str
    title: str
    description: str
    category: str
    priority: TaskPriority
    due_in_days: int
    steps: Tuple[str, ...] = field(default_factory=tuple)


def _template(key, title, description, category, priority, due_in_days, steps: List[str]) -> TaskTemplate:
    return TaskTemplate(key, title, description, category, priority, due_in_days, tuple(steps))


def _evidence(key, title, description, category, priority, due_in_days, locate, check, confirm) -> TaskTemplate:
    """Evidence templates share the same four-step shape"""
    return _template(
        key,
        title,
        description,
        category,
        priority,
        due_in_days,
        [
            f"1. {locate}",
            "2. Anexe o documento no sistema através da seção 'Documentos'",
            f"3. {check}",
            f"4. {confirm}",
        ],
    )


HIGH = TaskPriority.HIGH
MEDIUM = TaskPriority.MEDIUM

# ============================================================================
# Baseline and trigger templates
# ============================================================================

TASK_TEMPLATES: Dict[str, TaskTemplate] = {
    t.key: t
    for t in (
        _template(
            "dpo",
            "Designar DPO (Data Protection Officer)",
            "Nomear um responsável oficial pela proteção de dados na empresa conforme LGPD",
            "governance",
            HIGH,
            30,
            [
                "1. Defina se sua empresa precisa de DPO (mais de 50 funcionários ou dados sensíveis)",
                "2. Identifique um profissional qualificado interno ou contrate externo",
                "3. Elabore descrição de cargo com responsabilidades específicas da LGPD",
                "4. Formalize a nomeação através de documento oficial",
                "5. Registre o DPO junto à ANPD (quando aplicável)",
                "6. Divulgue o contato do DPO para colaboradores e clientes",
                "7. Garanta que o DPO tenha acesso direto à alta direção",
            ],
        ),
        _template(
            "privacyPolicy",
            "Criar/Atualizar Política de Privacidade",
            "Desenvolver política de privacidade completa e adequada à LGPD",
            "documentation",
            HIGH,
            45,
            [
                "1. Identifique todos os dados pessoais coletados pela empresa",
                "2. Defina as finalidades específicas para cada tratamento de dados",
                "3. Determine as bases legais para cada finalidade (consentimento, interesse legítimo, etc.)",
                "4. Inclua informações sobre compartilhamento de dados com terceiros",
                "5. Detalhe os direitos dos titulares e como exercê-los",
                "6. Especifique tempo de retenção para cada categoria de dados",
                "7. Adicione informações de contato do DPO ou responsável",
                "8. Publique a política em local de fácil acesso no site/app",
                "9. Implemente processo de versionamento e comunicação de mudanças",
            ],
        ),
        _template(
            "consent",
            "Implementar Sistema de Consentimento",
            "Estabelecer processos claros para coleta e gestão de consentimentos",
            "consent_management",
            HIGH,
            60,
            [
                "1. Identifique todos os pontos de coleta de dados que requerem consentimento",
                "2. Desenvolva formulários de consentimento claros e específicos",
                "3. Implemente checkbox separado para cada finalidade de tratamento",
                "4. Garanta que o consentimento seja livre, informado e inequívoco",
                "5. Crie sistema para registrar e armazenar consentimentos",
                "6. Desenvolva processo para renovação de consentimentos",
                "7. Implemente funcionalidade para revogação fácil do consentimento",
                "8. Treine equipe sobre procedimentos de consentimento",
                "9. Documente todo o processo para auditoria",
            ],
        ),
        _template(
            "dataMapping",
            "Realizar Mapeamento Completo de Dados",
            "Mapear todos os dados pessoais tratados e seus fluxos na empresa",
            "data_protection",
            HIGH,
            90,
            [
                "1. Identifique todas as fontes de coleta de dados pessoais",
                "2. Liste todos os sistemas que armazenam dados pessoais",
                "3. Mapeie o fluxo de dados entre sistemas internos",
                "4. Identifique compartilhamento de dados com terceiros",
                "5. Categorize os dados (pessoais, sensíveis, de crianças/adolescentes)",
                "6. Determine as finalidades específicas para cada tratamento",
                "7. Identifique as bases legais aplicáveis a cada tratamento",
                "8. Documente os tempos de retenção para cada categoria",
                "9. Crie registro de atividades de tratamento",
                "10. Implemente controles de acesso baseados no mapeamento",
            ],
        ),
        _template(
            "dataSubjectRights",
            "Implementar Atendimento aos Direitos dos Titulares",
            "Criar procedimentos para atender solicitações de direitos dos titulares",
            "data_subject_rights",
            MEDIUM,
            60,
            [
                "1. Crie canal específico para solicitações (email, formulário, telefone)",
                "2. Desenvolva processo de autenticação do solicitante",
                "3. Defina fluxo para confirmação de acesso aos dados",
                "4. Implemente processo para correção de dados pessoais",
                "5. Crie procedimento para exclusão de dados (direito ao esquecimento)",
                "6. Desenvolva sistema para portabilidade de dados",
                "7. Implemente processo para oposição ao tratamento",
                "8. Defina prazos de resposta (máximo 15 dias)",
                "9. Treine equipe para atendimento das solicitações",
                "10. Crie registro de todas as solicitações e respostas",
            ],
        ),
        _template(
            "security",
            "Implementar Medidas de Segurança",
            "Estabelecer medidas técnicas e administrativas de segurança",
            "security",
            HIGH,
            75,
            [
                "1. Realize análise de risco para todos os dados pessoais",
                "2. Implemente criptografia para dados sensíveis",
                "3. Configure controles de acesso baseados em função",
                "4. Implemente autenticação forte (MFA) para sistemas críticos",
                "5. Configure logs de auditoria para acessos a dados pessoais",
                "6. Implemente backup seguro e teste de recuperação",
                "7. Configure firewall e proteção contra malware",
                "8. Desenvolva política de senhas forte",
                "9. Implemente monitoramento de segurança",
                "10. Treine colaboradores sobre segurança da informação",
            ],
        ),
        _template(
            "incidentResponse",
            "Criar Plano de Resposta a Incidentes",
            "Desenvolver procedimentos para resposta a vazamentos de dados",
            "incident_management",
            MEDIUM,
            45,
            [
                "1. Defina o que constitui um incidente de dados pessoais",
                "2. Crie equipe de resposta a incidentes com papéis claros",
                "3. Desenvolva processo de detecção e notificação interna",
                "4. Implemente procedimento de contenção do incidente",
                "5. Defina processo de investigação e documentação",
                "6. Estabeleça critérios para notificação à ANPD (72 horas)",
                "7. Crie processo para comunicação aos titulares afetados",
                "8. Desenvolva plano de comunicação pública se necessário",
                "9. Implemente processo de revisão pós-incidente",
                "10. Teste o plano regularmente com simulações",
            ],
        ),
        _template(
            "training",
            "Implementar Programa de Treinamento LGPD",
            "Capacitar colaboradores sobre proteção de dados pessoais",
            "training",
            MEDIUM,
            90,
            [
                "1. Desenvolva conteúdo de treinamento específico para cada função",
                "2. Crie módulo básico sobre princípios da LGPD",
                "3. Desenvolva treinamento específico para áreas críticas",
                "4. Implemente treinamento sobre direitos dos titulares",
                "5. Treine equipe sobre procedimentos de consentimento",
                "6. Capacite equipe técnica sobre segurança de dados",
                "7. Treine gestores sobre responsabilidades da LGPD",
                "8. Implemente avaliação de conhecimento pós-treinamento",
                "9. Crie programa de reciclagem periódica",
                "10. Documente participação e resultados dos treinamentos",
            ],
        ),
        _template(
            "vendorManagement",
            "Implementar Gestão de Fornecedores",
            "Adequar contratos e processos com fornecedores que tratam dados",
            "vendor_management",
            MEDIUM,
            60,
            [
                "1. Identifique todos os fornecedores que tratam dados pessoais",
                "2. Classifique fornecedores por nível de risco",
                "3. Desenvolva cláusulas contratuais específicas para LGPD",
                "4. Exija comprovação de adequação à LGPD dos fornecedores",
                "5. Implemente processo de due diligence para novos fornecedores",
                "6. Revise e adeque contratos existentes",
                "7. Defina responsabilidades claras para cada fornecedor",
                "8. Implemente monitoramento de compliance dos fornecedores",
                "9. Crie processo de auditoria de fornecedores críticos",
                "10. Desenvolva plano de contingência para substituição de fornecedores",
            ],
        ),
    )
}

BASELINE_TEMPLATE_KEYS: Tuple[str, ...] = ("privacyPolicy", "consent", "dataMapping", "dataSubjectRights")

# ============================================================================
# Evidence templates
# ============================================================================

EVIDENCE_TEMPLATES: Dict[str, TaskTemplate] = {
    t.key: t
    for t in (
        _evidence(
            "attachPrivacyPolicyDoc",
            "Anexar Documento da Política de Privacidade",
            "Anexar cópia da política de privacidade documentada e atualizada",
            "documentation",
            HIGH,
            15,
            "Localize a versão mais atual da política de privacidade da empresa",
            "Certifique-se de que o documento está atualizado e completo",
            "Verifique se a política contém todos os elementos exigidos pela LGPD",
        ),
        _evidence(
            "attachDataMappingDoc",
            "Anexar Documento de Mapeamento de Dados",
            "Anexar documentação do mapeamento dos dados pessoais coletados e processados",
            "data_protection",
            HIGH,
            30,
            "Compile toda a documentação do mapeamento de dados da empresa",
            "Certifique-se de que inclui todos os fluxos de dados",
            "Verifique se contém categorias de dados, finalidades e bases legais",
        ),
        _evidence(
            "attachDataSubjectProceduresDoc",
            "Anexar Documento de Procedimentos para Solicitações de Titulares",
            "Anexar documentação dos procedimentos para atender solicitações dos titulares",
            "data_subject_rights",
            HIGH,
            20,
            "Localize a documentação dos procedimentos para atendimento de solicitações",
            "Verifique se inclui processos para acesso, correção e exclusão de dados",
            "Confirme que os prazos e responsabilidades estão claramente definidos",
        ),
        _evidence(
            "attachConsentDoc",
            "Anexar Comprovante de Consentimento",
            "Anexar documentação que comprove como o consentimento é solicitado formalmente",
            "consent_management",
            HIGH,
            15,
            "Reúna exemplos de formulários ou processos de consentimento",
            "Certifique-se de que demonstra como o consentimento é coletado",
            "Verifique se o processo está claro e inequívoco",
        ),
        _evidence(
            "attachSharingNotificationDoc",
            "Anexar Documento de Notificação de Compartilhamento",
            "Anexar documentação que comprove como o compartilhamento de dados é informado aos titulares",
            "data_sharing",
            MEDIUM,
            20,
            "Localize contratos ou notificações sobre compartilhamento de dados",
            "Verifique se inclui informações sobre terceiros que recebem dados",
            "Confirme que os titulares são adequadamente informados",
        ),
        _evidence(
            "attachCloudProviderDoc",
            "Anexar Contrato com Provedor de Nuvem",
            "Anexar contrato ou comprovante do provedor de nuvem utilizado",
            "vendor_management",
            MEDIUM,
            25,
            "Localize o contrato com o provedor de nuvem",
            "Verifique se o contrato inclui cláusulas de proteção de dados",
            "Confirme que o provedor atende aos requisitos da LGPD",
        ),
        _evidence(
            "attachSystemContractDoc",
            "Anexar Contrato do Sistema de Armazenamento",
            "Anexar contrato ou especificação do sistema de armazenamento",
            "vendor_management",
            MEDIUM,
            25,
            "Localize o contrato ou especificação do sistema",
            "Verifique se inclui informações sobre segurança de dados",
            "Confirme que o fornecedor está adequado à LGPD",
        ),
        _evidence(
            "attachInternationalTransferDoc",
            "Anexar Documentação de Transferência Internacional",
            "Anexar cláusula contratual para transferência internacional de dados",
            "international_transfer",
            HIGH,
            30,
            "Localize contratos com empresas no exterior",
            "Verifique se inclui cláusulas de adequação internacional",
            "Confirme que atende aos requisitos da LGPD para transferência",
        ),
        _evidence(
            "attachHrDataCollectionDoc",
            "Anexar Procedimentos de Coleta de Dados de RH",
            "Anexar documentação dos procedimentos de coleta de dados no processo de contratação",
            "hr_compliance",
            MEDIUM,
            20,
            "Compile a documentação dos processos de RH",
            "Verifique se inclui todos os procedimentos de coleta",
            "Confirme que está adequado às exigências da LGPD",
        ),
        _evidence(
            "attachSensitiveDataConsentDoc",
            "Anexar Consentimento para Dados Sensíveis de Funcionários",
            "Anexar documentação do consentimento para processamento de dados sensíveis",
            "hr_compliance",
            HIGH,
            15,
            "Localize formulários de consentimento para dados sensíveis",
            "Verifique se o consentimento é explícito e específico",
            "Confirme que atende aos requisitos para dados sensíveis",
        ),
        _evidence(
            "attachFinancialSecurityDoc",
            "Anexar Documentação de Segurança de Dados Financeiros",
            "Anexar documentação das medidas de proteção de dados financeiros",
            "financial_security",
            HIGH,
            25,
            "Compile documentação sobre proteção de dados financeiros",
            "Verifique se inclui medidas técnicas e organizacionais",
            "Confirme que atende aos padrões de segurança financeira",
        ),
        _evidence(
            "attachPaymentCertificationDoc",
            "Anexar Certificação de Segurança para Pagamentos",
            "Anexar certificação de segurança para processamento de pagamentos",
            "financial_security",
            HIGH,
            20,
            "Localize certificações de segurança (PCI DSS, etc.)",
            "Verifique se a certificação está válida",
            "Confirme que cobre o escopo necessário",
        ),
        _evidence(
            "attachMarketingConsentDoc",
            "Anexar Processo de Consentimento para Marketing",
            "Anexar documentação do processo de obtenção de consentimento para marketing",
            "marketing_compliance",
            MEDIUM,
            20,
            "Compile documentação dos processos de consentimento de marketing",
            "Verifique se inclui opt-in e opt-out claros",
            "Confirme que está adequado às regras de marketing direto",
        ),
        _evidence(
            "attachCookiePolicyDoc",
            "Anexar Política de Cookies",
            "Anexar política de cookies e tecnologias de rastreamento",
            "marketing_compliance",
            MEDIUM,
            15,
            "Localize a política de cookies da empresa",
            "Verifique se inclui todos os tipos de cookies utilizados",
            "Confirme que permite controle pelo usuário",
        ),
        _evidence(
            "attachCrmSecurityDoc",
            "Anexar Documentação de Proteção do CRM",
            "Anexar documentação das medidas de proteção de dados no CRM",
            "sales_compliance",
            MEDIUM,
            20,
            "Compile documentação sobre segurança do CRM",
            "Verifique se inclui controles de acesso e auditoria",
            "Confirme que atende aos requisitos de proteção",
        ),
        _evidence(
            "attachItSecurityPolicyDoc",
            "Anexar Política de Segurança da Informação",
            "Anexar política de segurança da informação documentada",
            "it_security",
            HIGH,
            20,
            "Localize a política de segurança da informação",
            "Verifique se está atualizada e implementada",
            "Confirme que cobre proteção de dados pessoais",
        ),
        _evidence(
            "attachIncidentResponsePlanDoc",
            "Anexar Plano de Resposta a Incidentes",
            "Anexar plano de resposta a incidentes de segurança",
            "incident_management",
            HIGH,
            25,
            "Localize o plano de resposta a incidentes",
            "Verifique se inclui procedimentos para vazamento de dados",
            "Confirme que atende aos requisitos da LGPD",
        ),
        _evidence(
            "attachDataRequestProcessDoc",
            "Anexar Processo de Atendimento às Solicitações LGPD",
            "Anexar documentação do processo de atendimento às solicitações dos titulares",
            "customer_service",
            HIGH,
            20,
            "Compile documentação dos processos de atendimento LGPD",
            "Verifique se inclui todos os direitos dos titulares",
            "Confirme que os prazos estão adequados",
        ),
        _evidence(
            "attachTrainingCertificatesDoc",
            "Anexar Certificados de Treinamento LGPD",
            "Anexar certificados de treinamento sobre proteção de dados",
            "training",
            MEDIUM,
            15,
            "Reúna certificados de treinamento dos atendentes",
            "Verifique se os treinamentos cobrem proteção de dados",
            "Confirme que estão atualizados",
        ),
    )
}


def get_template(key: str) -> TaskTemplate:
    """
    Look up a template by key across both libraries.

    Raises:
        KeyError: If no template is registered under key
    """
    if key in TASK_TEMPLATES:
        return TASK_TEMPLATES[key]
    return EVIDENCE_TEMPLATES[key]
