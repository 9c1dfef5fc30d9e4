"""
Learning bounded context - Domain layer.

This context handles flashcard study:
- Cards and their review history
- Weighted selection of the next card
- Due-date scheduling from a fixed rating table
- Deck statistics
"""
