"""Core orchestration package.

Architectural role:
    Exposes the invocation layer that sits between API/CLI entrypoints and the
    image subsystem (client, extractor, persistence).

Composition:
    - `engine`: control flow for one tool invocation.
    - `result_types`: per-invocation data contracts.
    - `errors`: exceptions mapped to failure results by `engine`.

Determinism and side effects:
    Package import itself is deterministic and side-effect free. Runtime side effects
    are performed by `engine` during request processing.
"""
