"""Shared error taxonomy, API error rendering and serializer fields."""
