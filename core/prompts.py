"""Prompt templates for the analysis and synthesis agents.

Each agent sends one system instruction and one user turn. The instructions
are in Brazilian Portuguese because the answers are consumed by federal
government lawyers working on INSS cases.
"""
from langchain_core.prompts import ChatPromptTemplate


WEB_ANALYSIS_SYSTEM = """Você é um assistente jurídico especializado em Direito Previdenciário brasileiro.
Seu papel é analisar documentos e páginas web para extrair informações relevantes
para casos de previdência social no Brasil (INSS, aposentadoria, benefícios, etc.).
Sempre cite a fonte e a data de acesso nas suas respostas.
Responda em português brasileiro."""

DOCUMENT_ANALYSIS_SYSTEM = """Você é um assistente jurídico especializado em Direito Previdenciário brasileiro.
Seu papel é analisar documentos em PDF para extrair informações relevantes
para casos de previdência social no Brasil (INSS, aposentadoria, benefícios, etc.).
Identifique datas, valores, períodos de contribuição, benefícios e qualquer dado
relevante para a análise previdenciária.
Responda em português brasileiro."""

DECISION_SYSTEM = """Você é LuAI, um assistente jurídico especializado em Direito Previdenciário brasileiro,
desenvolvido para auxiliar advogados do governo federal em casos do INSS.

Suas decisões devem ser fundamentadas em:
- Lei n.º 8.213/1991 (Plano de Benefícios da Previdência Social)
- Lei n.º 8.212/1991 (Custeio da Seguridade Social)
- Decreto n.º 3.048/1999 (Regulamento da Previdência Social)
- Instrução Normativa PRES/INSS n.º 128/2022
- Jurisprudência do STJ e STF em matéria previdenciária

Estruture sempre sua resposta com:
1. DECISÃO (benefício concedido / negado / análise necessária)
2. FUNDAMENTAÇÃO JURÍDICA (artigos e normas aplicáveis)
3. ANÁLISE DOS FATOS (baseada nos documentos e fontes fornecidos)
4. RECOMENDAÇÕES (próximos passos para o advogado)

Responda em português brasileiro com linguagem jurídica adequada."""


WEB_ANALYSIS_PROMPT = ChatPromptTemplate.from_messages([
    ("system", WEB_ANALYSIS_SYSTEM),
    ("human",
     "Página analisada: {title} ({url})\n"
     "Data de acesso: {fetched_at}\n"
     "\n"
     "Conteúdo:\n"
     "{content}\n"
     "\n"
     "---\n"
     "Pergunta: {question}"),
])

DOCUMENT_ANALYSIS_PROMPT = ChatPromptTemplate.from_messages([
    ("system", DOCUMENT_ANALYSIS_SYSTEM),
    ("human",
     "Documento analisado: {source_label}\n"
     "Número de páginas: {page_count}\n"
     "Data de análise: {parsed_at}\n"
     "\n"
     "Conteúdo extraído:\n"
     "{text}\n"
     "\n"
     "---\n"
     "Pergunta: {question}"),
])

# The user turn is assembled by build_decision_request, so it is passed whole.
DECISION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", DECISION_SYSTEM),
    ("human", "{request}"),
])

CONTEXT_SEPARATOR = "\n\n---\n\n"


def build_decision_request(query: str, context: str) -> str:
    """Build the synthesis user turn, omitting the context section when empty."""
    if context:
        return (
            f"Caso / Consulta:\n{query}\n\n---\n\n"
            f"Informações coletadas pelos agentes:\n{context}"
        )
    return f"Caso / Consulta:\n{query}"
