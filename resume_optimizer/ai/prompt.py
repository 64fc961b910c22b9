from __future__ import annotations

from resume_optimizer.ai.types import ChatMessage
from resume_optimizer.optimization.language import normalize_language, section_names
from resume_optimizer.schemas.resume import OptimizationOptions

BASE_CRITERIA = (
    "Clear structure and layout to capture the recruiter's attention within seconds",
    "Professional format with well-defined sections, readable fonts, and balanced margins",
    "Highlighting relevant technical skills for the industry",
    "Removing irrelevant or overly personal information",
    "Correcting spelling and grammar errors",
    "Balancing technical skills and soft skills",
    "Using impactful language and action verbs",
    "Optimizing organization for Applicant Tracking Systems (ATS)",
)

_JSON_CONTRACT = """IMPORTANT: Your response must be a valid JSON object with exactly these fields:
{
  "optimizedText": "The complete HTML-formatted improved resume content",
  "suggestions": [
    {"type": "structure", "text": "What to improve", "impact": "Why this helps"},
    {"type": "content", "text": "What to improve", "impact": "Why this helps"},
    {"type": "skills", "text": "What to improve", "impact": "Why this helps"},
    {"type": "formatting", "text": "What to improve", "impact": "Why this helps"},
    {"type": "language", "text": "What to improve", "impact": "Why this helps"},
    {"type": "keywords", "text": "What to improve", "impact": "Why this helps"},
    {"type": "ats", "text": "What to improve", "impact": "Why this helps"}
  ],
  "keywordSuggestions": ["keyword1", "keyword2", "keyword3", ...],
  "atsScore": (number between 0-100)
}"""

_SCORE_GUIDE = """ATS SCORE CALCULATION:
Calculate the atsScore (0-100) based on these factors:
- Content quality and relevance (30%): How well the content matches typical job requirements
- Keyword optimization (25%): Presence of industry-relevant keywords
- Structure and organization (20%): Clear sections with proper headings
- Formatting and readability (15%): Clean format that's easy for ATS to parse
- Quantified achievements (10%): Specific metrics and results
- Overall impact and professionalism (5%): General impression and polish

For each suggestion implemented, the score should increase by approximately:
- Major improvement: +5-10 points
- Moderate improvement: +3-5 points
- Minor improvement: +1-2 points"""

_KEYWORD_GUIDE = """KEYWORD AND SUGGESTION GENERATION INSTRUCTIONS:
- First, CAREFULLY analyze the resume to identify ALL skills, terms, and concepts that are ALREADY PRESENT
- For each potential keyword or suggestion, check the entire resume to ensure it's not already mentioned
- Only suggest keywords that are ABSENT from the resume in ANY form (including plurals, hyphenations, or variations)
- For suggestions, focus on recommending genuinely new content that would significantly enhance the resume
- Each suggestion should offer something that cannot be inferred from the existing content"""


def build_system_prompt(language: str, options: OptimizationOptions) -> str:
    names = section_names(language)
    parts = [
        "You are an expert resume optimizer who helps improve resumes for ATS compatibility "
        f"and recruiter appeal in {language}.\n\n"
        "You specialize in transforming regular resumes into highly effective documents that pass "
        "through Applicant Tracking Systems and impress recruiters.\n\n"
        "You will format your output as HTML with semantic section IDs to enable proper template "
        "application. Ensure all sections present in the original resume are properly identified."
    ]
    if options.target_role:
        parts.append(
            f"You are specifically optimizing this resume for {options.target_role} positions, "
            "so emphasize relevant skills and experiences accordingly."
        )
    if options.industry_sector:
        parts.append(
            f"You are optimizing this resume for the {options.industry_sector} industry sector, "
            "focusing on high-value keywords and skills specific to this domain."
        )
    if options.focus_sections:
        focus = ", ".join(names.get(section, section) for section in options.focus_sections)
        parts.append(f"Pay special attention to improving these sections: {focus}.")

    parts.append(
        'IMPORTANT: When formatting the HTML, place the "section-title" class on heading elements '
        "(h1, h2), NOT on section elements. Example:\n"
        f'- Correct: <section id="resume-summary"><h2 class="section-title">{names["resume-summary"]}</h2>...</section>\n'
        f'- Incorrect: <section id="resume-summary" class="section-title"><h2>{names["resume-summary"]}</h2>...</section>'
    )
    parts.append(
        f"IMPORTANT: All section titles must be in {language}. Do not use English section names "
        f"unless {language} is English."
    )
    parts.append(
        "CRITICAL INSTRUCTIONS FOR SUGGESTIONS AND KEYWORDS:\n"
        "- NEVER suggest improvements or changes that are already implemented in the resume\n"
        "- Keywords must be highly relevant to the industry/role AND absent from the current resume\n"
        "- For technologies or tools already mentioned in the resume, do not suggest them again as keywords"
    )
    parts.append(
        "It is very important to create the resume, the suggestions and the keywords in this "
        f"language: {language}."
    )
    return "\n\n".join(parts)


def build_user_prompt(resume_text: str, language: str, options: OptimizationOptions) -> str:
    names = section_names(language)
    criteria = list(BASE_CRITERIA) + [c for c in options.custom_instructions if c.strip()]
    lines = ["TASK: Analyze and optimize the following resume, focusing on these criteria:", ""]
    lines.extend(f"{i}. {item}" for i, item in enumerate(criteria, start=1))
    prompt = "\n".join(lines)

    if options.include_ats_instructions:
        prompt += (
            "\n\nATS OPTIMIZATION TIPS:\n"
            f'- Use standard section headings in {language} (e.g., "{names["resume-experience"]}", '
            f'"{names["resume-education"]}", "{names["resume-skills"]}")\n'
            "- Include keywords from the industry and job descriptions\n"
            "- Avoid using tables, graphics, or complex formatting\n"
            "- Ensure contact information is clearly visible at the top\n"
            "- Use bullet points for accomplishments and responsibilities\n"
            "- Quantify achievements with metrics when possible"
        )

    section_lines = ["CRITICAL HTML FORMATTING INSTRUCTIONS:"]
    for section_id, name in names.items():
        section_lines.append(f'  - Use <section id="{section_id}"> for {name} section (without any class on the section tag)')
        if section_id == "resume-header":
            section_lines.append(
                '    - Add class="section-title name" to the <h1> with the person\'s name, and wrap '
                'contact details in <span class="email|phone|address|linkedin">'
            )
        else:
            section_lines.append(f'    - Add class="section-title" to the section title: <h2 class="section-title">{name}</h2>')
    section_lines.append(f"- Use the section titles in {language}, not in English (unless {language} is English)")
    section_lines.append("- Use appropriate HTML tags (h1, h2, h3, p, ul, li) and do not include any CSS or styling")
    prompt += "\n\n" + "\n".join(section_lines)

    prompt += f"\n\nResume to optimize:\n{resume_text}"

    if options.job_description_text:
        prompt += (
            f"\n\nJob Description to match against:\n{options.job_description_text}\n"
            "The above job description should be used to identify relevant keywords and tailor suggestions."
        )

    prompt += f"\n\n{_KEYWORD_GUIDE}\n\n{_JSON_CONTRACT}\n\n{_SCORE_GUIDE}"
    prompt += (
        "\n\nGuidelines:\n"
        f"- Provide between 1-{options.max_suggestions} high-impact suggestions across different categories\n"
        f"- Include 1-{options.max_keywords} relevant industry keywords that should be added to the resume\n"
        "- Ensure the optimized text maintains all relevant information from the original\n"
        "- Do not include ANY explanatory text, code blocks, or other content outside the JSON structure"
    )
    return prompt


def _claude_suffix(language: str) -> str:
    return (
        "IMPORTANT CLAUDE-SPECIFIC INSTRUCTIONS:\n"
        "- Your response must be ONLY valid JSON - no explanatory text outside the JSON object\n"
        '- For the "optimizedText" field, include properly escaped HTML with section IDs\n'
        "- Do not include ```json and ``` around your response\n"
        '- When escaping HTML in JSON, replace " with \\" inside HTML attributes\n'
        "- Verify that your JSON is valid before responding\n"
        f"- Make sure all section titles are in {language}, not in English (unless the language is English)"
    )


def build_optimization_messages(
    resume_text: str,
    provider: str,
    language: str | None,
    options: OptimizationOptions,
) -> list[ChatMessage]:
    language = normalize_language(language or options.language)
    system = build_system_prompt(language, options)
    user = build_user_prompt(resume_text, language, options)
    if provider == "claude":
        user = f"{user}\n\n{_claude_suffix(language)}"

    return [
        ChatMessage(role="system", content=system),
        ChatMessage(role="user", content=user),
    ]
