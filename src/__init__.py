"""
Pehchan Recognition Engine

Append-only, hash-chained ledger of peer attestations ("recognitions")
for matrimonial profiles, with a decaying trust score per profile.

Engine principles:
- The ledger is the source of truth; profile scores are a rebuilt cache
- Only verified accounts may attest
- Tampering is detectable, never silently accepted
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
