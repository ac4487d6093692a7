"""
Boundary layer for external system integrations.

Handles persistence of chats, messages and study documents.
"""
