"""
User Event Service

Publishes and consumes user activity events in two DTO styles:
an immutable record (UserEvent) and a mutable bean (UserEventBean).
"""

__version__ = "1.0.0"
