"""
Pydantic data models for the classification guess stage.

Includes:
- Address models (Address, RecipientSet)
- Request model (ClassificationRequest)
- Outcome (Answer, NoAnswer, NO_ANSWER)
- Expected service response (ClassificationGuess)
"""

from classification_guess.models.address_models import Address, RecipientSet
from classification_guess.models.guess_models import ClassificationGuess
from classification_guess.models.outcome import NO_ANSWER, Answer, NoAnswer, Outcome
from classification_guess.models.request_models import ClassificationRequest

__all__ = [
    # Address models
    "Address",
    "RecipientSet",
    # Request model
    "ClassificationRequest",
    # Outcome
    "Answer",
    "NoAnswer",
    "NO_ANSWER",
    "Outcome",
    # Service response
    "ClassificationGuess",
]
