"""
CompSchema - data component schema extractor

Classifies every data component of the game protocol into a
serialization pattern and emits component_schema.json.

Packages:
    protocol/  - wire labels and writers, value-type descriptors
    registry/  - component definition loading, reference encoder
    classify/  - resolver, record introspector, framing probe, classifier
    schema/    - schema entries, emitter, override merge, diff
    browser/   - Textual schema browser
"""

__version__ = "0.1.0"
