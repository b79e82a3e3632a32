"""
Monitor Kernel - balance top-up engine

Keeps a watchlist of recipient accounts funded from a single treasury:
- Greedy, order-dependent selection under the treasury balance
- Per-recipient cooldown between top-ups
- Two-phase check/perform protocol for an external trigger
- Best-effort disbursement with a cooperative work budget
"""

__version__ = "0.1.0"
