"""Test package for the IntelX console.

Structure:
    - unit/: State machines, models, config and responders in isolation
    - integration/: HTTP API driving a whole workspace

Responses are produced by controllable providers so timing-sensitive
behaviour (ordering, cancellation) is tested deterministically.
"""
