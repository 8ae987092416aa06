"""Command-line interface for Veo Studio."""
