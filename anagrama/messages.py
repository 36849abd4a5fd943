"""Localized strings for presentation layers."""

from anagrama.models import AnimationStatus, Corpus, Language

MESSAGES: dict[Language, dict[str, str]] = {
    Language.ES: {
        "loading": "Cargando textos...",
        "error_title": "Error al cargar los textos",
        "retry": "Reintentar",
        "play": "Reproducir",
        "about_title": "Sobre esta animación",
        "about_text": (
            "Esta animación demuestra la transformación anagramática entre textos "
            "poéticos. Cada letra se mueve de su posición original a su nueva "
            "ubicación, revelando cómo las mismas letras pueden formar textos "
            "completamente diferentes."
        ),
        "about_note": (
            "Los textos mantienen exactamente el mismo inventario de letras, "
            "demostrando la naturaleza anagramática de la transformación."
        ),
        "close": "Cerrar",
        "transformation": "Transformación {n}",
        AnimationStatus.TRANSFORMING.value: "Transformación anagramática en proceso",
        AnimationStatus.WAITING.value: "Listo para la siguiente transformación",
        AnimationStatus.IDLE.value: "Listo para comenzar",
    },
    Language.EN: {
        "loading": "Loading texts...",
        "error_title": "Error loading texts",
        "retry": "Retry",
        "play": "Play",
        "about_title": "About this animation",
        "about_text": (
            "This animation demonstrates the anagrammatic transformation between "
            "poetic texts. Each letter moves from its original position to its new "
            "location, revealing how the same letters can form completely different "
            "texts."
        ),
        "about_note": (
            "The texts maintain exactly the same inventory of letters, demonstrating "
            "the anagrammatic nature of the transformation."
        ),
        "close": "Close",
        "transformation": "Transformation {n}",
        AnimationStatus.TRANSFORMING.value: "Anagrammatic transformation in progress",
        AnimationStatus.WAITING.value: "Ready for next transformation",
        AnimationStatus.IDLE.value: "Ready to begin",
    },
}


def get_messages(language: Language | str) -> dict[str, str]:
    """Message table for a language; anything but English reads Spanish."""
    if language == Language.EN:
        return MESSAGES[Language.EN]
    return MESSAGES[Language.ES]


def phase_description(status: AnimationStatus, language: Language | str) -> str:
    return get_messages(language)[status.value]


def subtitle_for(corpus: Corpus, index: int) -> str:
    """Subtitle for a text index, or a numbered fallback."""
    subtitle = corpus.subtitle(index)
    if subtitle:
        return subtitle
    return get_messages(corpus.language)["transformation"].format(n=index + 1)
