"""Localized workflow messages.

The controller writes its step-by-step log and the final summary in the
language requested by the client.  Unknown language tags fall back to
English, as do keys missing from a non-English table.
"""

from __future__ import annotations

from collections.abc import Mapping

from sponsor_evaluator.domain.enums import AgentAction, Language

MESSAGES: dict[Language, dict[str, str]] = {
    Language.EN: {
        "log_reasoning": "Agent is reviewing the company and club profile.",
        "log_thinking": "Controller is deciding the next step...",
        "log_decision": "Controller decision: {action}",
        "log_extract": "Extracting company information from the website...",
        "log_extract_done": "Website content extracted.",
        "log_search": "Searching the web for company information...",
        "log_profile": "Building the business profile...",
        "log_fit": "Scoring sponsor fit against your club...",
        "log_summary": "Preparing the final recommendation.",
        "log_failure_prefix": "Evaluation stopped",
        "action_extract": "extract website content",
        "action_search": "search business info",
        "action_profile": "extract business profile",
        "action_fit": "score sponsor fit",
        "action_done": "finish evaluation",
        "final_summary": (
            "{business} scored {score}/100 as a potential sponsor. "
            "Suggested partnership: {type}."
        ),
        "error_generic": "The agent could not complete the evaluation. Please try again.",
        "error_provide_company": "Please provide a company name or website.",
    },
    Language.FR: {
        "log_reasoning": "L'agent analyse l'entreprise et le profil du club.",
        "log_thinking": "Le contrôleur choisit la prochaine étape...",
        "log_decision": "Décision du contrôleur : {action}",
        "log_extract": "Extraction des informations du site web...",
        "log_extract_done": "Contenu du site web extrait.",
        "log_search": "Recherche d'informations sur l'entreprise...",
        "log_profile": "Construction du profil de l'entreprise...",
        "log_fit": "Évaluation de l'adéquation avec votre club...",
        "log_summary": "Préparation de la recommandation finale.",
        "log_failure_prefix": "Évaluation interrompue",
        "action_extract": "extraire le contenu du site",
        "action_search": "rechercher l'entreprise",
        "action_profile": "extraire le profil de l'entreprise",
        "action_fit": "évaluer l'adéquation",
        "action_done": "terminer l'évaluation",
        "final_summary": (
            "{business} obtient {score}/100 en tant que sponsor potentiel. "
            "Partenariat suggéré : {type}."
        ),
        "error_generic": "L'agent n'a pas pu terminer l'évaluation. Veuillez réessayer.",
        "error_provide_company": "Veuillez indiquer un nom d'entreprise ou un site web.",
    },
    Language.DE: {
        "log_reasoning": "Der Agent prüft das Unternehmen und das Vereinsprofil.",
        "log_thinking": "Der Controller entscheidet über den nächsten Schritt...",
        "log_decision": "Entscheidung des Controllers: {action}",
        "log_extract": "Unternehmensinformationen werden von der Website extrahiert...",
        "log_extract_done": "Website-Inhalt extrahiert.",
        "log_search": "Unternehmensinformationen werden im Web gesucht...",
        "log_profile": "Unternehmensprofil wird erstellt...",
        "log_fit": "Sponsoren-Passung zu Ihrem Verein wird bewertet...",
        "log_summary": "Abschließende Empfehlung wird vorbereitet.",
        "log_failure_prefix": "Bewertung abgebrochen",
        "action_extract": "Website-Inhalt extrahieren",
        "action_search": "Unternehmen suchen",
        "action_profile": "Unternehmensprofil extrahieren",
        "action_fit": "Sponsoren-Passung bewerten",
        "action_done": "Bewertung abschließen",
        "final_summary": (
            "{business} erreicht {score}/100 als potenzieller Sponsor. "
            "Vorgeschlagene Partnerschaft: {type}."
        ),
        "error_generic": "Der Agent konnte die Bewertung nicht abschließen. Bitte erneut versuchen.",
        "error_provide_company": "Bitte geben Sie einen Firmennamen oder eine Website an.",
    },
}

_ACTION_KEYS: dict[AgentAction, str] = {
    AgentAction.EXTRACT_FROM_URL: "action_extract",
    AgentAction.SEARCH_BUSINESS_INFO: "action_search",
    AgentAction.EXTRACT_BUSINESS_PROFILE: "action_profile",
    AgentAction.SCORE_SPONSOR_FIT: "action_fit",
    AgentAction.DONE: "action_done",
}


def ensure_language(value: str | Language | None) -> Language:
    """Coerce a client-supplied language tag, defaulting to English."""
    if isinstance(value, Language):
        return value
    try:
        return Language((value or "").strip().lower())
    except ValueError:
        return Language.EN


class Messages:
    """Message lookup bound to one language.

    Usage::

        messages = Messages("fr")
        messages.get("log_thinking")
        messages.format("final_summary", business="Acme", score=90, type="...")
    """

    def __init__(self, language: str | Language | None = None) -> None:
        self.language = ensure_language(language)
        self._table: Mapping[str, str] = MESSAGES[self.language]

    def get(self, key: str) -> str:
        if key in self._table:
            return self._table[key]
        return MESSAGES[Language.EN][key]

    def format(self, key: str, **values: object) -> str:
        """Substitute ``{placeholder}`` tokens.

        Plain replacement rather than ``str.format`` so that braces inside
        business names never break the template.
        """
        text = self.get(key)
        for name, value in values.items():
            text = text.replace("{" + name + "}", str(value))
        return text

    def action_label(self, action: AgentAction) -> str:
        return self.get(_ACTION_KEYS[action])
