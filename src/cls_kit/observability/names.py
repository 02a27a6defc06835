# src/cls_kit/observability/names.py

"""Standard metric names for cls-kit observability.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Parse Metrics
# ============================================================================

# Duration
CLS_PARSE_DURATION = "cls_parse_duration"

# Counters
CLS_PARSES_TOTAL = "cls_parses_total"
CLS_PARSE_ERRORS_TOTAL = "cls_parse_errors_total"
CLS_RECORDS_DECODED = "cls_records_decoded"


# ============================================================================
# Export Metrics
# ============================================================================

# Duration
CLS_EXPORT_DURATION = "cls_export_duration"
