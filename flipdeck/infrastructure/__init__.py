"""
Infrastructure layer.

File storage for decks and backups, the persisted JSON schema and the
CSV importer.
"""
