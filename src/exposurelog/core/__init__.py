"""Core domain: the exposure record, its row mapping and the storage port."""
