"""
Application layer.

Orchestrates the domain for a study session: keeps session state, calls the
scheduling rules and persists the deck through repository protocols.
"""
