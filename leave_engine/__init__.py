"""Time & leave accounting engine.

Working-duration calculation, tenure-based leave entitlement and leave
balance aggregation, plus a thin stateless FastAPI surface over them.
"""
