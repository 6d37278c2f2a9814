"""
Core utilities — shared exceptions and cross-cutting concerns used by the
validation boundary, the collaborator implementations and the tools.
"""
