"""Execution pipeline for boots.

- **arguments**: Identifier source (``--boots a b c`` -> ``["a", "b", "c"]``)
- **loader**: Module loading by file path or dotted name
- **resolver**: Identifier -> validated ``BootsScript`` (exhaustive, ordered)
- **sequencer**: Fail-fast ``OutcomeStream`` over the validated scripts
- **session**: Orchestration (gather -> resolve -> execute)
"""
