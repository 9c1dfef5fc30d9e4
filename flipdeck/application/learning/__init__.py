"""
Learning bounded context - Application layer.

Contains the study session engine:
- Commands: reveal, rate, filter changes, card CRUD, deck import/reset, backups
- Queries: current card, pool, progress, statistics, lessons, search
"""
