"""Flashdeck: multi-user flashcard deck backend."""
