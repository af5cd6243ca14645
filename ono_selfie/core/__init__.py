"""Core pipeline package.

Composition:
    - `config`: environment-driven `SelfieConfig`.
    - `errors`: shared exception hierarchy.
    - `types`: request/result data contracts.
    - `engine`: the linear generate-then-dispatch pipeline.
"""
