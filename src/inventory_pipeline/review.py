"""
Helpers for routing flagged results to a human: suggested actions and spoken confirmations.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .models import MatchResult, ReviewAction, ReviewSuggestion

REVIEW_ACTIONS = {
    "en": [
        ReviewAction(type="repeat", description="Repeat the dictation for this product"),
        ReviewAction(type="take_photo", description="Take a photo of the product"),
        ReviewAction(type="add_new", description="Add as a new product to the catalog"),
        ReviewAction(type="skip", description="Skip this product"),
    ],
    "fr": [
        ReviewAction(type="repeat", description="Répéter la dictée pour ce produit"),
        ReviewAction(type="take_photo", description="Prendre une photo du produit"),
        ReviewAction(type="add_new", description="Ajouter comme nouveau produit à la base de données"),
        ReviewAction(type="skip", description="Ignorer ce produit"),
    ],
}

_CONFIRMATIONS = {
    "en": {
        "missing": "I didn't catch that. Could you repeat?",
        "possible": "I may have heard {quantity} {unit} of {name}. Is that correct?",
        "unknown": 'I did not recognize the product "{name}". Do you want to add it to the catalog?',
        "recorded": "Recorded: {quantity} {unit} of {name}",
    },
    "fr": {
        "missing": "Je n'ai pas compris. Pourriez-vous répéter?",
        "possible": "J'ai peut-être entendu {quantity} {unit} de {name}. Est-ce correct?",
        "unknown": 'Je n\'ai pas reconnu le produit "{name}". Voulez-vous l\'ajouter à la base de données?',
        "recorded": "Enregistré: {quantity} {unit} de {name}",
    },
}


def _language(language: str) -> str:
    return language if language in _CONFIRMATIONS else "en"


def suggest_review_actions(
    results: Sequence[MatchResult],
    language: str = "en",
) -> list[ReviewSuggestion]:
    """One suggestion per flagged result, in input order. Unflagged results are skipped."""
    actions = REVIEW_ACTIONS[_language(language)]
    return [
        ReviewSuggestion(item=r, actions=[a.model_copy() for a in actions])
        for r in results
        if r.needs_review
    ]


def confirmation_text(result: Optional[MatchResult], language: str = "en") -> str:
    """Sentence read back to the person dictating the inventory."""
    templates = _CONFIRMATIONS[_language(language)]
    if result is None:
        return templates["missing"]

    fields = {
        "quantity": result.quantity,
        "unit": result.unit,
        "name": result.product_name,
    }
    if result.needs_review:
        key = "possible" if result.possible_match else "unknown"
    else:
        key = "recorded"
    return " ".join(templates[key].format(**fields).split())
