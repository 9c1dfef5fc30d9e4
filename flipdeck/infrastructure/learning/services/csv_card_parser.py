"""
Parser for plain-text card lists.

Each line holds ``lesson;question;answer``. Lines with fewer than three
semicolon-separated fields are retried with tab as the separator; lines that
still do not yield three fields are skipped. There is no header row and
columns after the third are ignored.
"""

import logging

from flipdeck.domain.learning.entities.card import Card

logger = logging.getLogger(__name__)

PRIMARY_DELIMITER = ";"
FALLBACK_DELIMITER = "\t"
REQUIRED_COLUMNS = 3


def _split_columns(line: str) -> list[str] | None:
    columns = line.split(PRIMARY_DELIMITER)
    if len(columns) >= REQUIRED_COLUMNS:
        return columns
    columns = line.split(FALLBACK_DELIMITER)
    if len(columns) >= REQUIRED_COLUMNS:
        return columns
    return None


def parse_csv(text: str | bytes) -> list[Card]:
    """
    Parse a delimited text blob into new, unrated cards.

    Args:
        text: File contents; bytes are decoded as UTF-8 (BOM tolerated)

    Returns:
        One card per usable line, in file order, each with a fresh id
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8-sig", errors="replace")
    text = text.removeprefix("\ufeff")

    cards: list[Card] = []
    skipped = 0
    for line_number, line in enumerate(text.splitlines(), start=1):
        columns = _split_columns(line)
        if columns is None:
            skipped += 1
            logger.debug(f"Skipping line {line_number}: fewer than {REQUIRED_COLUMNS} columns")
            continue
        lesson, question, answer = (column.strip() for column in columns[:REQUIRED_COLUMNS])
        cards.append(Card.create(lesson, question, answer))

    logger.info(f"Parsed {len(cards)} cards from CSV ({skipped} lines skipped)")
    return cards
