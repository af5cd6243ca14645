"""Image generation package.

Scope:
    Gemini Imagen HTTP client, response decoding service and the materializer
    that turns decoded bytes into a temp file or data URL.

Non-goals:
    - No retries, batching or caching of generated images.
"""
