"""Services Layer — imperative shell around the pure rules in core/.

Invariants:
    - Services re-read store state on every call (no caching across operations)
    - Business-rule violations raised as SocialGraphError subclasses

Design Decisions:
    - Lifecycle engine receives store and policy by injection (no globals)
"""
