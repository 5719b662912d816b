"""
Standards Service package.

This package decides whether a proposed AV room design complies with
configurable organizational standards. It provides:

- app.main: API surface for design validation, rule management and health.
- app.rules: Rule model, condition matcher, expression evaluator and engine.
- app.registry: In-memory registry of the rules designs are validated against.

Guidelines:
- Rule evaluation is pure; the context passed in is never mutated.
- Malformed expressions pass, missing design data fails.
- Rule storage and context assembly belong to callers.
"""
