"""
Signature module.

Captures handwritten signatures as timestamped stroke records and replays
them statically or as a time-bounded animation.
"""
