"""Shared infrastructure for the component batch test simulator.

Provides the structured logger, the exception hierarchy and the error
mapper used by the ``batchsim`` package.
"""
