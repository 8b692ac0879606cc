"""
Pipeline stages for ReviewLens.

Contains the modules that take reviews from ingestion to the response:
- Ingestion Agent (upstream or fallback)
- Raw Record Mapper
- Filter Stage
- Per-Review Normalizer
- Listing Aggregation Engine
- Response Assembler
"""
