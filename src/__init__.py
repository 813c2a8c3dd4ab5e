"""
Meeting Scheduler - Source Package

A terminal scheduler for online meetings. Accounts live in a flat
comma-separated file; meetings only live for the current session.

DESIGN PRINCIPLES:
1. Domain layer (models, policy, parsers) never does I/O
2. Persistence is best-effort and never crashes a session
3. A corrupt account file is fatal at startup
4. Only password digests are ever stored or compared
"""

__version__ = "1.0.0"
__author__ = "Meeting Scheduler Team"
