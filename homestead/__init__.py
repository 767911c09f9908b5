"""
Stellar Homestead - Turn-based colony management simulation.

A colony of buildings and colonists feeds a shared resource ledger that
must never go negative. Each turn cycles through production, a random
world event and a management phase before win/lose conditions are
checked. The package provides:
- The simulation engine (ledger, producers, events, phases)
- A console game and a save file format
- An HTTP API for in-memory sessions
"""

__version__ = "0.1.0"
