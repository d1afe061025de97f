"""
CompSchema - Classification

Components:
    resolver.py    - descriptor -> wire label
    records.py     - record expansion (empty / array / embed / tuple / custom)
    probe.py       - integer framing probe
    catalog.py     - Enum Catalog + run summary
    classifier.py  - precedence rules, one schema entry per registry entry
"""
