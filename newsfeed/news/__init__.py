"""
News Module
===========

Article cache subsystem and the per-user views built on it:
- NewsAPI fetching and payload normalization
- TTL-bounded article cache keyed by (country, category)
- Background refresh of a fixed country x category matrix
- On-demand resolution with stale-cache fallback
- Read/favorite overlay and keyword search
"""
