"""Version information for entitytags."""

# Semantic versioning: MAJOR.MINOR.PATCH
__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.1.0 - Bulk entity tag deletion
#         - Selection by ids, entity refs, entity type + namespace, entity type + tag names
#         - Dual-store writes (ArangoDB system of record, Elasticsearch search index)
#         - HTTP endpoint and `etags bulk-delete` CLI command
