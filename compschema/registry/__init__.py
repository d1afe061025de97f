"""
CompSchema - Registry

Read-only component definitions plus the encoder and sample
capabilities the framing probe needs.
"""
