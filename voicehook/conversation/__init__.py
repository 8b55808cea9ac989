"""Conversation state: turn models and session history stores."""
