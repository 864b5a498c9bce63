"""
Mocha - Ledger Core

The state engine behind the Mocha budgeting app: coffee jars (budget
envelopes), savings goals, transfers between jars, and derived insights.

DESIGN PRINCIPLES:
1. Money is exact (Decimal, never float)
2. Bad user input never crashes - it fails with a typed result
3. A failed command never changes state
4. Every command is auditable
5. The UI only ever sees complete snapshots
"""

__version__ = "1.0.0"
__author__ = "Mocha Team"
