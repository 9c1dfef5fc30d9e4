"""Sample cards used to seed a fresh installation."""

from typing import Final

from flipdeck.domain.learning.entities.card import Card

SAMPLE_CARDS: Final[tuple[tuple[str, str, str], ...]] = (
    (
        "OOP",
        "What are the four pillars of OOP?",
        "Encapsulation, Inheritance, Polymorphism, Abstraction",
    ),
    (
        "OOP",
        "What is the difference between composition and inheritance?",
        "Composition: an object holds others (has-a); inheritance: a subclass extends a base (is-a)",
    ),
    (
        "Python",
        "What is duck typing?",
        "Objects are used by the behaviour they offer, not by their declared type",
    ),
)


def build_sample_deck() -> list[Card]:
    """Return the sample cards with fresh ids."""
    return [Card.create(lesson, question, answer) for lesson, question, answer in SAMPLE_CARDS]
