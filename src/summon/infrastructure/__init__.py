"""Infrastructure layer — rule-graph analysis and spellbook loading."""
