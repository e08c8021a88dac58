"""
Constants shared by the Curation Engine.

Runtime-tunable values (retry bound, backoff base, model) live in config.py;
the values here are part of the curation contract and are not configurable.
"""

# Reason attached to every testimonial chosen by the fallback selector
FALLBACK_REASON = "Recently highlighted testimonial."

# Maximum number of testimonials the fallback selector returns
FALLBACK_LIMIT = 3

# HTTP status codes the ranking service uses for transient overload
TRANSIENT_STATUS_CODES = frozenset({503})

# Values for CurationOutcome.source and the X-Curation-Source response header
CURATION_SOURCES = {
    'AI': 'ai',
    'FALLBACK': 'fallback',
}
