"""Core argument-rewriting pipeline: argument model, references, rules, dispatch."""
