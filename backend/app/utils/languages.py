"""Target market reference data for translations.

Language codes may carry a region suffix (de-AT, fr-BE). Lookups use the
base language before the first hyphen. Unknown languages fall back to
neutral defaults so that any code can be translated.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageDetails:
    """Market details used in prompts and fallback records."""

    name: str
    country: str
    regulator: str
    banks: str
    currency: str
    business_culture: str
    formality_level: str


@dataclass(frozen=True)
class CulturalGuidelines:
    """Tone and style guidance for a target market."""

    communication_style: str
    preferred_examples: str
    cultural_values: str
    avoid_terms: str
    tonality: str


LANGUAGE_DETAILS: dict[str, LanguageDetails] = {
    "da": LanguageDetails(
        name="Danish",
        country="Denmark",
        regulator="Finanstilsynet",
        banks="Danske Bank, Nykredit, Jyske Bank",
        currency="DKK",
        business_culture="direct, egalitarian, consensus-oriented",
        formality_level="moderate",
    ),
    "sv": LanguageDetails(
        name="Swedish",
        country="Sweden",
        regulator="Finansinspektionen (FI)",
        banks="SEB, Handelsbanken, Swedbank",
        currency="SEK",
        business_culture="efficient, democratic, innovation-focused",
        formality_level="low-moderate",
    ),
    "no": LanguageDetails(
        name="Norwegian",
        country="Norway",
        regulator="Finanstilsynet Norge",
        banks="DNB, Nordea Norge, SpareBank 1",
        currency="NOK",
        business_culture="straightforward, egalitarian, environmentally conscious",
        formality_level="moderate",
    ),
    "fi": LanguageDetails(
        name="Finnish",
        country="Finland",
        regulator="FIN-FSA (Finanssivalvonta)",
        banks="Nordea Finland, OP Group, Danske Bank Finland",
        currency="EUR",
        business_culture="methodical, tech-savvy, reserved but warm",
        formality_level="moderate-high",
    ),
    "de": LanguageDetails(
        name="German",
        country="Germany",
        regulator="BaFin (Bundesanstalt für Finanzdienstleistungsaufsicht)",
        banks="Deutsche Bank, Commerzbank, DZ Bank",
        currency="EUR",
        business_culture="precise, thorough, hierarchical, quality-focused",
        formality_level="high",
    ),
    "fr": LanguageDetails(
        name="French",
        country="France",
        regulator="ACPR (Autorité de Contrôle Prudentiel et de Résolution)",
        banks="BNP Paribas, Crédit Agricole, Société Générale",
        currency="EUR",
        business_culture="sophisticated, relationship-oriented, intellectual",
        formality_level="high",
    ),
    "es": LanguageDetails(
        name="Spanish",
        country="Spain",
        regulator="Banco de España",
        banks="Banco Santander, BBVA, CaixaBank",
        currency="EUR",
        business_culture="warm, relationship-focused, family-oriented",
        formality_level="moderate-high",
    ),
    "it": LanguageDetails(
        name="Italian",
        country="Italy",
        regulator="Banca d'Italia",
        banks="UniCredit, Intesa Sanpaolo, Banco BPM",
        currency="EUR",
        business_culture="style-conscious, relationship-based, traditional",
        formality_level="high",
    ),
    "pt": LanguageDetails(
        name="Portuguese",
        country="Portugal",
        regulator="Banco de Portugal",
        banks="Millennium bcp, Caixa Geral de Depósitos, Novo Banco",
        currency="EUR",
        business_culture="respectful, traditional, community-oriented",
        formality_level="moderate-high",
    ),
    "nl": LanguageDetails(
        name="Dutch",
        country="Netherlands",
        regulator="DNB (De Nederlandsche Bank)",
        banks="ING Group, ABN AMRO, Rabobank",
        currency="EUR",
        business_culture="direct, pragmatic, internationally-minded",
        formality_level="low-moderate",
    ),
}

CULTURAL_GUIDELINES: dict[str, CulturalGuidelines] = {
    "da": CulturalGuidelines(
        communication_style="Direct but polite, avoid excessive formality",
        preferred_examples="Danish companies like Novo Nordisk, Maersk, or Carlsberg for business references",
        cultural_values="Emphasize work-life balance, sustainability, and social responsibility",
        avoid_terms="Overly hierarchical language, excessive superlatives",
        tonality="Professional yet approachable, consensus-building language",
    ),
    "sv": CulturalGuidelines(
        communication_style="Efficient and straightforward, minimal small talk",
        preferred_examples="Swedish companies like Spotify, H&M, or Volvo for innovation references",
        cultural_values="Innovation, efficiency, environmental consciousness, gender equality",
        avoid_terms="Redundant explanations, excessive formality",
        tonality="Clean, modern, and democratically-minded language",
    ),
    "no": CulturalGuidelines(
        communication_style="Honest and direct, value practicality over theory",
        preferred_examples="Norwegian companies like Equinor, Telenor, or DNB for examples",
        cultural_values="Environmental sustainability, social welfare, pragmatic solutions",
        avoid_terms="Overly complex academic language",
        tonality="Straightforward, reliable, environmentally-conscious messaging",
    ),
    "fi": CulturalGuidelines(
        communication_style="Reserved but warm, appreciate thoroughness and precision",
        preferred_examples="Finnish companies like Nokia, Kone, or Fortum for technology focus",
        cultural_values="Technology adoption, educational excellence, quiet competence",
        avoid_terms="Emotional appeals, rushed timelines",
        tonality="Methodical, tech-savvy, understated confidence",
    ),
    "de": CulturalGuidelines(
        communication_style="Highly detailed, formal, and authoritative",
        preferred_examples="German companies like SAP, Siemens, or BMW for engineering precision",
        cultural_values="Quality, precision, thoroughness, engineering excellence",
        avoid_terms="Casual language, incomplete information, superficial explanations",
        tonality="Authoritative, comprehensive, quality-focused language",
    ),
    "fr": CulturalGuidelines(
        communication_style="Sophisticated and relationship-focused",
        preferred_examples="French companies like LVMH, Total, or L'Oréal for luxury/quality focus",
        cultural_values="Intellectual discourse, quality, tradition, cultural sophistication",
        avoid_terms="Overly casual tone, rushed presentations",
        tonality="Elegant, intellectual, relationship-building language",
    ),
    "es": CulturalGuidelines(
        communication_style="Warm and personal, emphasize relationships",
        preferred_examples="Spanish companies like Zara (Inditex), Telefónica, or Banco Santander",
        cultural_values="Family business traditions, personal relationships, community focus",
        avoid_terms="Impersonal language, aggressive sales tactics",
        tonality="Warm, relationship-oriented, family-conscious messaging",
    ),
    "it": CulturalGuidelines(
        communication_style="Elegant and design-conscious, appreciate style and tradition",
        preferred_examples="Italian companies like Ferrari, Prada, or UniCredit for style/tradition",
        cultural_values="Style, tradition, family business values, craftsmanship",
        avoid_terms="Utilitarian language, disregard for tradition",
        tonality="Stylish, traditional, family-oriented language",
    ),
    "pt": CulturalGuidelines(
        communication_style="Respectful and traditional, emphasize heritage and community",
        preferred_examples="Portuguese companies like EDP, Galp, or Jerónimo Martins",
        cultural_values="Tradition, community focus, respect for hierarchy, family values",
        avoid_terms="Overly modern/disruptive language without context",
        tonality="Respectful, traditional, community-focused language",
    ),
    "nl": CulturalGuidelines(
        communication_style="Very direct and practical, no-nonsense approach",
        preferred_examples="Dutch companies like Philips, Shell, or ASML for innovation focus",
        cultural_values="Pragmatism, directness, international outlook, innovation",
        avoid_terms="Flowery language, unnecessary politeness",
        tonality="Straightforward, practical, internationally-minded language",
    ),
}

DEFAULT_GUIDELINES = CulturalGuidelines(
    communication_style="Professional and clear",
    preferred_examples="Local market leaders",
    cultural_values="Professional excellence",
    avoid_terms="Overly casual language",
    tonality="Professional and respectful",
)


def base_language(language_code: str) -> str:
    """Return the language part of a code such as 'de-AT'."""
    return language_code.split("-")[0]


def get_language_details(language_code: str) -> LanguageDetails:
    """Look up market details, defaulting to a neutral EUR market."""
    base = base_language(language_code)
    details = LANGUAGE_DETAILS.get(base)
    if details is not None:
        return details
    return LanguageDetails(
        name=base,
        country="",
        regulator="",
        banks="",
        currency="EUR",
        business_culture="professional",
        formality_level="moderate",
    )


def get_cultural_guidelines(language_code: str) -> CulturalGuidelines:
    """Look up cultural guidelines for the base language."""
    return CULTURAL_GUIDELINES.get(base_language(language_code), DEFAULT_GUIDELINES)


def language_display_name(language_code: str) -> str:
    """English display name of a language, or the base code when unknown."""
    return get_language_details(language_code).name
