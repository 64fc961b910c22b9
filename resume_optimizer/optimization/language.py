from __future__ import annotations

SUPPORTED_LANGUAGES = ("English", "French", "Spanish")
DEFAULT_LANGUAGE = "English"

_ALIASES = {
    "english": "English",
    "en": "English",
    "eng": "English",
    "anglais": "English",
    "inglés": "English",
    "ingles": "English",
    "french": "French",
    "fr": "French",
    "fra": "French",
    "français": "French",
    "francais": "French",
    "francés": "French",
    "frances": "French",
    "spanish": "Spanish",
    "es": "Spanish",
    "spa": "Spanish",
    "español": "Spanish",
    "espanol": "Spanish",
    "espagnol": "Spanish",
}


def normalize_language(label: str | None) -> str:
    """Map a language label or code onto one of the supported languages.

    Region suffixes (``fr-CA``, ``es_MX``) are ignored. Anything unknown is
    treated as English.
    """
    if not label:
        return DEFAULT_LANGUAGE
    key = label.strip().lower().replace("_", "-")
    if key in _ALIASES:
        return _ALIASES[key]
    return _ALIASES.get(key.split("-", 1)[0], DEFAULT_LANGUAGE)


SECTION_NAMES: dict[str, dict[str, str]] = {
    "English": {
        "resume-header": "Personal Information",
        "resume-summary": "Professional Summary",
        "resume-experience": "Experience",
        "resume-education": "Education",
        "resume-skills": "Skills",
        "resume-languages": "Languages",
        "resume-certifications": "Certifications",
        "resume-projects": "Projects",
        "resume-awards": "Awards & Achievements",
        "resume-references": "References",
        "resume-publications": "Publications",
        "resume-volunteering": "Volunteering",
        "resume-additional": "Additional Information",
        "resume-interests": "Interests",
    },
    "French": {
        "resume-header": "Informations Personnelles",
        "resume-summary": "Profil Professionnel",
        "resume-experience": "Expérience Professionnelle",
        "resume-education": "Formation",
        "resume-skills": "Compétences",
        "resume-languages": "Langues",
        "resume-certifications": "Certifications",
        "resume-projects": "Projets",
        "resume-awards": "Prix et Distinctions",
        "resume-references": "Références",
        "resume-publications": "Publications",
        "resume-volunteering": "Bénévolat",
        "resume-additional": "Informations Complémentaires",
        "resume-interests": "Centres d'Intérêt",
    },
    "Spanish": {
        "resume-header": "Información Personal",
        "resume-summary": "Perfil Profesional",
        "resume-experience": "Experiencia Profesional",
        "resume-education": "Formación Académica",
        "resume-skills": "Habilidades",
        "resume-languages": "Idiomas",
        "resume-certifications": "Certificaciones",
        "resume-projects": "Proyectos",
        "resume-awards": "Premios y Reconocimientos",
        "resume-references": "Referencias",
        "resume-publications": "Publicaciones",
        "resume-volunteering": "Voluntariado",
        "resume-additional": "Información Adicional",
        "resume-interests": "Intereses",
    },
}


def section_names(language: str | None) -> dict[str, str]:
    return SECTION_NAMES[normalize_language(language)]
