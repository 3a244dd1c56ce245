"""
ywkv: single-node key-value server over a durable embedded store.

GET /{key} reads, POST /{key} writes; every request is gated by a single
bearer token. Storage is one SQLite table, created lazily on first write.
"""

__version__ = "0.1.0"
