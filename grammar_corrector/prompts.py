from __future__ import annotations
from enum import Enum
from typing import Dict, Optional

from .settings import CorrectorOptions


class Action(str, Enum):
    FIX_GRAMMAR = "Fix Grammar"
    MAKE_FORMAL = "Make Formal"
    MAKE_FRIENDLY = "Make Friendly"
    CUSTOM = "Custom"
    AMERICAN_ENGLISH = "American English"

    @classmethod
    def parse(cls, name: Optional[str]) -> "Action":
        v = (name or "").strip().lower()
        for a in cls:
            if a.value.lower() == v or a.name.lower() == v.replace("-", "_"):
                return a
        return DEFAULT_ACTION


DEFAULT_ACTION = Action.FIX_GRAMMAR

BUILTIN_PROMPTS: Dict[Action, str] = {
    Action.FIX_GRAMMAR: (
        "You are now a grammar and style corrector. Your only task is to revise the following text "
        "by fixing grammar, punctuation, and phrasing errors while preserving the original meaning "
        "and tone. Do not add explanations, translations, notes, or additional output. Output only "
        "the corrected version in the same language as the input."
    ),
    Action.MAKE_FORMAL: (
        "You are now a professional writing assistant. Your only task is to rewrite the following "
        "text in a formal, professional tone. Correct any grammar issues and make it sound more "
        "formal and business-appropriate. Do not add explanations, translations, notes, or "
        "additional output. Output only the rewritten version in the same language as the input."
    ),
    Action.MAKE_FRIENDLY: (
        "You are now a friendly writing assistant. Your only task is to rewrite the following text "
        "in a friendly, conversational tone. Correct any grammar issues and make it sound more "
        "approachable and warm. Do not add explanations, translations, notes, or additional output. "
        "Output only the rewritten version in the same language as the input."
    ),
    Action.CUSTOM: (
        "You are a helpful writing assistant. Please improve the following text according to your "
        "best judgment. Make it clear, engaging, and well-written. Return only the improved text "
        "without explanations."
    ),
    Action.AMERICAN_ENGLISH: (
        "Your role is to be an English guru, an expert in authentic American English, who assists "
        "users in expressing their thoughts clearly and fluently. There is only one possible "
        "response, and it should match the format of the original text. You are not just "
        "translating words; you are delving into the essence of the user's message and "
        "reconstructing it in a way that maintains logical clarity and coherence. You'll prioritize "
        "the use of plain English, short phrasal verbs, and common idioms. It's important to craft "
        "sentences with varied lengths to create a natural rhythm and flow, making the language "
        "sound smooth and engaging. Avoid regional expressions or idioms that are too unique or "
        "restricted to specific areas. Your goal is to make American English accessible and "
        "appealing to a broad audience, helping users communicate effectively in a style that "
        "resonates with a wide range of English speakers. Avoid using hyphens when possible."
    ),
}

# option field holding the per-action override
OVERRIDE_FIELDS: Dict[Action, str] = {
    Action.FIX_GRAMMAR: "fix_grammar_prompt",
    Action.MAKE_FORMAL: "make_formal_prompt",
    Action.MAKE_FRIENDLY: "make_friendly_prompt",
    Action.CUSTOM: "custom_prompt",
    Action.AMERICAN_ENGLISH: "american_english_prompt",
}


def _non_blank(value: Optional[str]) -> Optional[str]:
    if value and value.strip():
        return value
    return None


def resolve_prompt(action: "Action | str | None", options: CorrectorOptions) -> str:
    """Return the instruction text for an action.

    Order: the action's own override, then the generic ``system_prompt``,
    then the built-in prompt. Unknown names resolve as Fix Grammar.
    """
    a = action if isinstance(action, Action) else Action.parse(action)
    override = _non_blank(getattr(options, OVERRIDE_FIELDS[a], None))
    if override:
        return override
    generic = _non_blank(options.system_prompt)
    if generic:
        return generic
    return BUILTIN_PROMPTS[a]
