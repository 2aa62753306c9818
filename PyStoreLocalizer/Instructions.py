from enum import Enum

linesep = '\n'

class ContextTag(str, Enum):
    """ The kinds of text that are sent for translation """
    APP_NAME = 'app name'
    APP_SUBTITLE = 'app subtitle'
    APP_KEYWORDS = 'app keywords'
    APP_DESCRIPTION = 'app description'
    PROMOTIONAL_TEXT = 'promotional text'
    WHATS_NEW = "what's new section"
    PRIVACY_POLICY = 'privacy policy'

    def __str__(self) -> str:
        return self.value

# Attribute name -> context tag
FIELD_CONTEXTS : dict[str, ContextTag] = {
    'name': ContextTag.APP_NAME,
    'subtitle': ContextTag.APP_SUBTITLE,
    'privacyPolicyText': ContextTag.PRIVACY_POLICY,
    'description': ContextTag.APP_DESCRIPTION,
    'keywords': ContextTag.APP_KEYWORDS,
    'promotionalText': ContextTag.PROMOTIONAL_TEXT,
    'whatsNew': ContextTag.WHATS_NEW,
}

# Store limits for each field, in characters
FIELD_LIMITS : dict[str, int] = {
    'name': 30,
    'subtitle': 30,
    'keywords': 100,
    'promotionalText': 170,
    'description': 4000,
    'whatsNew': 4000,
}

language_instructions : dict[str, str] = {
    'German': "Translate to German (de-DE). Use formal language (Sie form) for user-facing content.",
    'French': "Translate to French (fr-FR). Use appropriate formal/informal tone for app store content.",
    'Spanish': "Translate to Spanish (es-ES, Spain Spanish not Latin American).",
    'Japanese': "Translate to Japanese. Use appropriate polite form (です/ます) for app store content.",
    'Chinese Simplified': "Translate to Simplified Chinese (zh-Hans). Use appropriate tone for mainland China market.",
    'Italian': "Translate to Italian (it-IT).",
    'Dutch': "Translate to Dutch (nl-NL, Netherlands Dutch).",
    'Portuguese': "Translate to Portuguese (pt-PT, European Portuguese not Brazilian).",
}

context_instructions : dict[ContextTag, str] = {
    ContextTag.APP_NAME: "This is an app name. Keep it concise and impactful. Maintain brand identity where appropriate.",
    ContextTag.APP_SUBTITLE: "This is an app subtitle. Keep it brief (max 30 characters) and descriptive.",
    ContextTag.APP_KEYWORDS: "These are app store keywords. Translate each keyword, maintaining SEO value. Separate with commas.",
    ContextTag.APP_DESCRIPTION: "This is an app description. Maintain marketing tone, features, and benefits. Keep formatting.",
    ContextTag.PROMOTIONAL_TEXT: "This is promotional text. Keep it engaging and action-oriented.",
    ContextTag.WHATS_NEW: "This is a what's new section. Keep bullet points or formatting if present.",
    ContextTag.PRIVACY_POLICY: "This is privacy policy text. Maintain legal accuracy and formal tone.",
}

default_context_instruction = "Maintain the original tone and intent."

translation_rules = linesep.join([
    "Important rules:",
    "- Provide ONLY the translation, no explanations or notes",
    "- Maintain any special characters, line breaks, or formatting",
    "- Do not add quotes around the translation",
    "- For app names, consider if translation is appropriate or if the original should be kept",
    "- For technical terms, use commonly accepted translations in the target market",
    ])

def GetLanguageInstruction(target_language : str) -> str:
    return language_instructions.get(target_language, f"Translate to {target_language}.")

def GetContextInstruction(context_tag : str) -> str:
    try:
        return context_instructions.get(ContextTag(context_tag), default_context_instruction)
    except ValueError:
        return default_context_instruction

def BuildTranslationPrompt(text : str, target_language : str, context_tag : str) -> str:
    """
    Build the request for translating a single field
    """
    return linesep.join([
        GetLanguageInstruction(target_language),
        "",
        GetContextInstruction(context_tag),
        "",
        translation_rules,
        "",
        "Text to translate:",
        text
        ])

def BuildShortenPrompt(text : str, target_language : str, context_tag : str, max_length : int) -> str:
    """
    First request to bring an over-long translation within the limit
    """
    return linesep.join([
        f"The following {target_language} translation of {context_tag} is too long at {len(text)} characters.",
        f"Rewrite it to be under {max_length} characters while preserving the key message.",
        f"Keep it in {target_language}. Keep it engaging and action-oriented.",
        "",
        f"IMPORTANT: Your response must be {max_length} characters or fewer. Provide ONLY the shortened text, no explanations.",
        "",
        "Text to shorten:",
        text
        ])

def BuildAggressiveShortenPrompt(text : str, target_language : str, max_length : int) -> str:
    """
    Follow-up request when the previous rewrite was still over the limit
    """
    return linesep.join([
        f"This text is STILL too long at {len(text)} characters. It MUST be under {max_length} characters.",
        f"Aggressively shorten it. Cut words, simplify, abbreviate if needed. Stay in {target_language}.",
        "",
        "Provide ONLY the shortened text, no explanations.",
        "",
        "Text:",
        text
        ])
