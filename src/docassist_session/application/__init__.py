"""Application layer of the session client.

Depends on ``core`` only; infrastructure implementations are injected
through the protocols in ``core.protocols``.
"""
