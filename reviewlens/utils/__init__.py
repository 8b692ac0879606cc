"""
Utility modules for ReviewLens.

Cross-cutting concerns:
- Formatting: Rounding, timestamp parsing, labels
- Hostaway client: Upstream HTTP access
- Export: JSON and CSV output
"""
