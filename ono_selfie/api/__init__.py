"""External interaction boundary (CLI and HTTP adapters).

Adapters perform argument/request validation and translate `SelfieError`
subclasses into exit codes or HTTP statuses. Pipeline logic lives in
`ono_selfie.core.engine`.
"""
