# src/notesite_kit/observability/names.py

"""Standard metric names for notesite-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Parser Metrics
# ============================================================================

# Duration
PARSE_DURATION = "parse_duration"

# Counters
PARSE_DOCUMENTS_TOTAL = "parse_documents_total"
PARSE_BLOCKS_TOTAL = "parse_blocks_total"


# ============================================================================
# Merger Metrics
# ============================================================================

# Duration
MERGE_DURATION = "merge_duration"

# Counters
MERGE_SECTIONS_TOTAL = "merge_sections_total"
MERGE_DUPLICATES_TOTAL = "merge_duplicates_total"
MERGE_CONFLICTS_TOTAL = "merge_conflicts_total"


# ============================================================================
# Navigation Metrics
# ============================================================================

# Duration
LINK_RESOLUTION_DURATION = "link_resolution_duration"

# Counters
LINKS_RESOLVED_TOTAL = "links_resolved_total"
LINK_ERRORS_TOTAL = "link_errors_total"


# ============================================================================
# Renderer Metrics
# ============================================================================

# Duration
RENDER_DURATION = "render_duration"

# Counters
RENDER_PAGES_TOTAL = "render_pages_total"
HIGHLIGHT_FALLBACKS_TOTAL = "highlight_fallbacks_total"


# ============================================================================
# Build Metrics
# ============================================================================

# Duration
BUILD_DURATION = "build_duration"

# Gauges
BUILD_SOURCES = "build_sources"
