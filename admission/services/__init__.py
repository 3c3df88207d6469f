"""
Services module for the admission engine.

Modules:
    collaborators.py        - proof oracle, clock and id source
    review_workflow.py      - two-stage review state machine
    application_service.py  - serialized transitions with revision checks
    system_review.py        - batch system-review pass
"""
