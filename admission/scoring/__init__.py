"""
scoring/ - Admission Scoring Engine

Modules:
    utils.py                  - Decimal utilities
    rule_tables.py            - Scoring rule tables and language thresholds
    eligibility.py            - Eligibility gate run on submission
    achievement_scorer.py     - Academic achievement sub-score (cap 15)
    performance_scorer.py     - Comprehensive performance sub-score (cap 5)
    academic_base.py          - Default academic base provider
    composite_calculator.py   - Composite total score
"""
