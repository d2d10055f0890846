"""
Internationalization (i18n) module for the domain sifter.

Provides translations for all console messages in English (en) and
French (fr).
"""

from typing import Optional


# Supported languages
SUPPORTED_LANGUAGES = frozenset({"en", "fr"})
DEFAULT_LANGUAGE = "en"


# Translation dictionary with all messages
# Structure: {message_key: {language_code: translated_message}}
TRANSLATIONS: dict[str, dict[str, str]] = {
    # Verdicts
    "status.likely_available": {
        "en": "POTENTIALLY AVAILABLE",
        "fr": "POTENTIELLEMENT DISPONIBLE",
    },
    "status.available": {
        "en": "AVAILABLE",
        "fr": "DISPONIBLE",
    },
    "status.taken": {
        "en": "NOT AVAILABLE",
        "fr": "NON DISPONIBLE",
    },

    # Batch processing
    "batch.domain_status": {
        "en": "{domain}: {verdict}",
        "fr": "{domain}: {verdict}",
    },
    "batch.domain_error": {
        "en": "Error for {domain}: {error}",
        "fr": "Erreur pour {domain}: {error}",
    },
    "batch.summary": {
        "en": "Summary: {available}/{processed} domain(s) available, {failed} failed, {skipped} skipped",
        "fr": "Bilan : {available}/{processed} domaine(s) disponible(s), {failed} en erreur, {skipped} ignoré(s)",
    },
    "batch.results_saved": {
        "en": "Full results saved to {path}",
        "fr": "Résultats complets sauvegardés dans {path}",
    },

    # Registry checker
    "registry.fetching_token": {
        "en": "Fetching registry security token...",
        "fr": "Récupération du jeton de sécurité du registre...",
    },

    # Ranking
    "rank.loading": {
        "en": "Loading and scoring domains...",
        "fr": "Chargement et évaluation des domaines...",
    },
    "rank.saving": {
        "en": "Saving best domains...",
        "fr": "Sauvegarde des meilleurs domaines...",
    },
    "rank.top_header": {
        "en": "Top {count} domains:",
        "fr": "Top {count} des meilleurs domaines :",
    },
    "rank.top_entry": {
        "en": "{rank}. {domain} (score: {score})",
        "fr": "{rank}. {domain} (score : {score})",
    },
    "rank.total": {
        "en": "Total domains evaluated: {count}",
        "fr": "Nombre total de domaines évalués : {count}",
    },

    # Generator
    "generate.started": {
        "en": "Generating {total} domain(s)...",
        "fr": "Génération de {total} domaine(s)...",
    },
    "generate.progress": {
        "en": "File {index} written ({done}/{total} domains)",
        "fr": "Fichier {index} écrit ({done}/{total} domaines)",
    },
    "generate.done": {
        "en": "Generation complete! Total domains: {count}",
        "fr": "Génération terminée ! Total de domaines : {count}",
    },

    # Errors
    "error.fatal": {
        "en": "Error: {message}",
        "fr": "Erreur : {message}",
    },
    "error.caused_by": {
        "en": "  caused by: {cause}",
        "fr": "  cause : {cause}",
    },
}


def get_message(
    key: str,
    language: Optional[str] = None,
    **kwargs,
) -> str:
    """
    Get a translated message by key.

    Args:
        key: The message key (e.g., 'status.taken')
        language: Language code ('en' or 'fr'). Defaults to DEFAULT_LANGUAGE.
        **kwargs: Format arguments for the message template

    Returns:
        The translated and formatted message string.
        If the key is not found, returns the key itself.
        If the language is not found, falls back to DEFAULT_LANGUAGE.

    Examples:
        >>> get_message('status.taken', 'en')
        'NOT AVAILABLE'
        >>> get_message('batch.domain_status', 'fr', domain='abc.fr', verdict='DISPONIBLE')
        'abc.fr: DISPONIBLE'
    """
    if language is None or language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    translations = TRANSLATIONS.get(key)
    if translations is None:
        return key

    message = translations.get(language)
    if message is None:
        message = translations.get(DEFAULT_LANGUAGE)

    if message is None:
        return key

    if kwargs:
        try:
            message = message.format(**kwargs)
        except KeyError:
            # Leave the template unformatted rather than fail a status line
            pass

    return message


def get_missing_translations(language: str) -> set[str]:
    """
    Get all message keys that are missing translations for a language.

    Args:
        language: The language code to check

    Returns:
        Set of message keys missing translations for the specified language.
    """
    return {
        key for key, translations in TRANSLATIONS.items()
        if language not in translations
    }
