"""Ember core: errors, configuration, AST and the language pipeline."""
