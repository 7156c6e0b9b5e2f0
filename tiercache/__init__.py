"""tiercache -- multi-level, promotion-based cache engine."""
