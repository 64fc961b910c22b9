"""Provider-free optimization used when every remote provider failed.

It cannot fail for non-empty input: the layout pass always produces markup,
the suggestion and keyword tables are static, and the score starts at a
fixed base.
"""

from __future__ import annotations

import html
import logging
import re

from resume_optimizer.core.config.scoring import get_scoring_value
from resume_optimizer.schemas.resume import OptimizationOptions, OptimizationResult
from resume_optimizer.scoring.impact import keyword_present, round_half_up
from resume_optimizer.scoring.normalize import normalize_suggestion
from resume_optimizer.optimization.language import normalize_language

logger = logging.getLogger(__name__)

FALLBACK_PROVIDER_ID = "fallback"

_BULLETS = ("•", "-")

SECTION_HEADERS = {
    "English": (
        "summary", "profile", "objective", "experience", "work history", "employment",
        "education", "academic background", "qualifications", "skills", "expertise",
        "competencies", "languages", "certifications", "projects", "achievements",
        "awards", "publications", "interests", "hobbies", "references", "contact",
    ),
    "French": (
        "résumé", "profil", "objectif", "expérience", "parcours professionnel", "emploi",
        "formation", "éducation", "études", "compétences", "expertises", "savoir-faire",
        "langues", "certifications", "projets", "réalisations", "prix", "publications",
        "centres d'intérêt", "loisirs", "références", "contact",
    ),
    "Spanish": (
        "resumen", "perfil", "objetivo", "experiencia", "historia laboral", "empleo",
        "educación", "formación", "calificaciones", "habilidades", "competencias",
        "idiomas", "certificaciones", "proyectos", "logros", "premios", "publicaciones",
        "intereses", "aficiones", "referencias", "contacto",
    ),
}

# Upper-cased header fragments mapped onto the standard section ids.
_STANDARD_SECTION_IDS = (
    (("PROFIL", "SUMMARY", "ABOUT"), "resume-summary"),
    (("EXPÉRIENCE", "EXPERIENCE", "WORK"), "resume-experience"),
    (("FORMATION", "EDUCATION", "ÉTUDES"), "resume-education"),
    (("COMPÉTENCES", "SKILLS", "TECHNOLOGIES"), "resume-skills"),
    (("LANGUE", "LANGUAGE"), "resume-languages"),
    (("CERTIFICATION", "QUALIFICATION"), "resume-certifications"),
    (("PROJET", "PROJECT"), "resume-projects"),
    (("RÉFÉRENCE", "REFERENCE"), "resume-references"),
)

GENERIC_SUGGESTIONS = {
    "English": (
        ("structure", "Improve the overall structure with clear section headings",
         "Makes your resume easier to scan for busy recruiters"),
        ("content", "Use more action verbs and quantify achievements",
         "Makes accomplishments more impactful and demonstrates measurable results"),
        ("skills", "Create a dedicated skills section with relevant keywords",
         "Improves ATS compatibility and showcases your core competencies"),
        ("language", "Expand descriptions of your experiences with more details",
         "Gives employers a better understanding of your capabilities and achievements"),
        ("formatting", "Use bullet points to present your achievements",
         "Improves readability and highlights your key contributions"),
    ),
    "French": (
        ("structure", "Améliorez la structure globale avec des titres de section clairs",
         "Rend votre CV plus facile à parcourir pour les recruteurs pressés"),
        ("content", "Utilisez plus de verbes d'action et quantifiez vos réalisations",
         "Rend vos accomplissements plus percutants et démontre des résultats mesurables"),
        ("skills", "Créez une section de compétences dédiée avec des mots-clés pertinents",
         "Améliore la compatibilité ATS et met en valeur vos compétences essentielles"),
        ("language", "Développez les descriptions de vos expériences avec plus de détails",
         "Donne aux employeurs une meilleure compréhension de vos capacités et réalisations"),
        ("formatting", "Utilisez des listes à puces pour présenter vos réalisations",
         "Améliore la lisibilité et met en évidence vos contributions clés"),
    ),
    "Spanish": (
        ("structure", "Mejore la estructura general con encabezados de sección claros",
         "Hace que su currículum sea más fácil de escanear para los reclutadores ocupados"),
        ("content", "Utilice más verbos de acción y cuantifique sus logros",
         "Hace que los logros sean más impactantes y demuestra resultados medibles"),
        ("skills", "Cree una sección de habilidades dedicada con palabras clave relevantes",
         "Mejora la compatibilidad con ATS y muestra sus competencias principales"),
        ("language", "Amplíe las descripciones de sus experiencias con más detalles",
         "Proporciona a los empleadores una mejor comprensión de sus capacidades y logros"),
        ("formatting", "Utilice viñetas para presentar sus logros",
         "Mejora la legibilidad y destaca sus contribuciones clave"),
    ),
}

_TECH_KEYWORDS = (
    "JavaScript", "Python", "React", "Node.js", "AWS", "Cloud", "DevOps", "Docker",
    "Kubernetes", "Agile", "Scrum", "Machine Learning",
)

COMMON_KEYWORDS = {
    "English": _TECH_KEYWORDS + (
        "Data Analysis", "SQL",
        "Project Management", "Leadership", "Strategy", "Marketing", "Sales", "Finance",
        "Customer Service", "Operations", "HR", "Business Development",
        "Communication", "Teamwork", "Problem-solving", "Critical Thinking",
        "Time Management", "Creativity", "Collaboration",
    ),
    "French": _TECH_KEYWORDS + (
        "Analyse de données", "SQL",
        "Gestion de projet", "Leadership", "Stratégie", "Marketing", "Ventes", "Finance",
        "Service client", "Opérations", "RH", "Développement commercial",
        "Communication", "Travail d'équipe", "Résolution de problèmes", "Esprit critique",
        "Gestion du temps", "Créativité", "Collaboration",
    ),
    "Spanish": _TECH_KEYWORDS + (
        "Análisis de datos", "SQL",
        "Gestión de proyectos", "Liderazgo", "Estrategia", "Marketing", "Ventas", "Finanzas",
        "Servicio al cliente", "Operaciones", "RRHH", "Desarrollo de negocios",
        "Comunicación", "Trabajo en equipo", "Resolución de problemas", "Pensamiento crítico",
        "Gestión del tiempo", "Creatividad", "Colaboración",
    ),
}

_CAPITALIZED_RE = re.compile(r"\b[A-Z][a-zA-Z0-9]+\b")
_STOP_WORDS = {"I", "A", "The", "An", "And", "For", "With"}
_MAX_KEYWORDS = 10

_SECTION_CHECKS = (
    re.compile(r"experience|work history", re.IGNORECASE),
    re.compile(r"education|degree|university", re.IGNORECASE),
    re.compile(r"skills|competencies", re.IGNORECASE),
    re.compile(r"summary|profile|objective", re.IGNORECASE),
)
_EMAIL_RE = re.compile(r"email|@", re.IGNORECASE)
_PHONE_RE = re.compile(r"phone|mobile", re.IGNORECASE)
_PROFILE_LINK_RE = re.compile(r"linkedin|github", re.IGNORECASE)
_BULLET_RE = re.compile(r"•|-|\*")
_METRIC_RE = re.compile(r"\d+%|\$\d+|\d+ years")


def _slug(value: str) -> str:
    slug = re.sub(r"\s+", "-", value.lower())
    slug = re.sub(r"[^\w\-]+", "", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def standard_section_id(header: str) -> str:
    upper = header.upper()
    for fragments, section_id in _STANDARD_SECTION_IDS:
        if any(fragment in upper for fragment in fragments):
            return section_id
    return f"resume-{_slug(header)}"


def is_section_header(line: str, language: str) -> bool:
    headers = SECTION_HEADERS.get(language, SECTION_HEADERS["English"])
    lower = line.lower()
    return any(header in lower for header in headers)


def _is_header(line: str, index: int, language: str) -> bool:
    if line.startswith(_BULLETS):
        return False
    if line == line.upper() and len(line) > 3 and any(ch.isalpha() for ch in line):
        return True
    return len(line) < 30 and index > 0 and not line.endswith(".") and is_section_header(line, language)


def improve_text_layout(text: str, language: str) -> str:
    """Wrap plain resume text in sectioned HTML. Text that already looks like markup is returned as is."""
    if "<" in text and ">" in text:
        return text

    out: list[str] = []
    current_section: str | None = None
    in_list = False

    for index, raw_line in enumerate(text.split("\n")):
        line = raw_line.strip()
        if not line:
            if current_section:
                out.append("<br/>")
            continue

        is_bullet = line.startswith(_BULLETS)
        if in_list and not is_bullet:
            out.append("</ul>")
            in_list = False

        escaped = html.escape(line, quote=False)
        if _is_header(line, index, language):
            if current_section:
                out.append("</section>")
            current_section = standard_section_id(line)
            out.append(f'<section id="{current_section}"><h2>{escaped}</h2>')
        elif index == 0:
            current_section = "resume-header"
            out.append(f'<section id="resume-header"><h1>{escaped}</h1>')
        elif index == 1 and current_section == "resume-header":
            out.append(f"<h3>{escaped}</h3>")
        elif index == 2 and current_section == "resume-header" and any(ch in line for ch in "@-|"):
            out.append(f"<p>{escaped}</p>")
        elif line.endswith(":") or (current_section == "resume-experience" and "|" in line):
            out.append(f"<h3>{escaped}</h3>")
        elif is_bullet:
            if not in_list:
                out.append("<ul>")
                in_list = True
            out.append(f"<li>{html.escape(line[1:].strip(), quote=False)}</li>")
        else:
            out.append(f"<p>{escaped}</p>")

    if in_list:
        out.append("</ul>")
    if current_section:
        out.append("</section>")
    return "".join(out)


def generic_suggestions(language: str):
    table = GENERIC_SUGGESTIONS.get(language, GENERIC_SUGGESTIONS["English"])
    return [
        normalize_suggestion({"type": category, "text": text, "impact": impact})
        for category, text, impact in table
    ]


def extract_keywords(text: str, language: str) -> list[str]:
    vocabulary = COMMON_KEYWORDS.get(language, COMMON_KEYWORDS["English"])
    matches = [keyword for keyword in vocabulary if keyword_present(keyword, text)]
    capitalized = [
        word for word in _CAPITALIZED_RE.findall(text) if len(word) > 2 and word not in _STOP_WORDS
    ]
    return list(dict.fromkeys(matches + capitalized))[:_MAX_KEYWORDS]


def estimate_ats_score(text: str) -> int:
    cfg = get_scoring_value("fallback", {}) or {}
    score = float(cfg.get("base_score", 65))

    section_bonus = float(cfg.get("section_bonus", 5))
    for pattern in _SECTION_CHECKS:
        if pattern.search(text):
            score += section_bonus

    if _EMAIL_RE.search(text):
        score += float(cfg.get("email_bonus", 2))
    if _PHONE_RE.search(text):
        score += float(cfg.get("phone_bonus", 2))
    if _PROFILE_LINK_RE.search(text):
        score += float(cfg.get("profile_link_bonus", 1))

    bullets = len(_BULLET_RE.findall(text))
    score += min(float(cfg.get("max_bullet_bonus", 5)), bullets / float(cfg.get("bullets_per_point", 3)))

    metrics = len(_METRIC_RE.findall(text))
    score += min(float(cfg.get("max_metric_bonus", 5)), metrics)

    return int(min(100, round_half_up(score)))


class FallbackGenerator:
    """Terminal cascade stage. Always available, never calls out."""

    provider_id = FALLBACK_PROVIDER_ID

    def is_available(self) -> bool:
        return True

    def generate(self, resume_text: str, language: str | None = None) -> OptimizationResult:
        lang = normalize_language(language)
        logger.info("fallback_generate language=%s len=%s", lang, len(resume_text))

        return OptimizationResult(
            optimized_text=improve_text_layout(resume_text, lang),
            suggestions=generic_suggestions(lang),
            keyword_suggestions=extract_keywords(resume_text, lang),
            ats_score=estimate_ats_score(resume_text),
            provider_id=FALLBACK_PROVIDER_ID,
            language=lang,
        )

    async def attempt_optimize(
        self, resume_text: str, language: str, options: OptimizationOptions
    ) -> OptimizationResult:
        return self.generate(resume_text, language or options.language)
