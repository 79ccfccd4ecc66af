"""Team allocation engine.

Sub-modules:
- quotas       – per-team category quotas and target sizes
- team         – bounded team container with derived views
- candidates   – eligible-team selection with staged relaxation
- allocator    – greedy multi-phase placement (``TeamBuilder``)
- balancer     – corrective cross-team swaps for category ordering
- team_report  – per-team summaries and console rendering
"""
