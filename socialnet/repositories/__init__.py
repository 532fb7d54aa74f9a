"""
Persistence adapters.

Services depend on the repository rather than opening SQLAlchemy sessions
themselves. Every public method runs in its own session; the graph mutation is
the only method that performs more than one write, and it does so inside a
single transaction.
"""
