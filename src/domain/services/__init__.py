"""Domain services for the recognition engine.

Pure functions with no I/O. Import from the submodules directly:
- recognition_hashing: entry hash computation
- recognition_score: decayed score and level calculation
- recognition_chain: chain verification and fork detection
- fraud_risk: profile fraud heuristics
"""
