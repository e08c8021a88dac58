"""
Curation Prompt Templates

Contains the system prompt and user prompt builder for the testimonial
ranking call.

Prompt Engineering Pattern:
- System prompt defines the role only
- User prompt lists every candidate inside XML tags plus the task
- Output shape is enforced through response_schema, the prompt restates it
"""

from typing import Sequence

from curation_backend.schemas.testimonials import Testimonial

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

CURATION_SYSTEM_PROMPT = """You are an AI assistant that curates testimonials to highlight the most impactful and recent ones.

<role>
You read user-submitted testimonials and pick the ones that best represent genuine user feedback for display on a public page.
</role>

<rules>
1. Only select testimonials from the list you are given. Never invent ids.
2. Select each testimonial at most once.
3. Every selection MUST include a short, specific reason.
4. Prefer testimonials that are detailed, specific, recent and representative.
</rules>
"""


def _format_testimonial(testimonial: Testimonial) -> str:
    return (
        f"- ID: {testimonial.id}\n"
        f"  Text: {testimonial.text}\n"
        f"  Author: {testimonial.author}\n"
        f"  Date: {testimonial.date}"
    )


def build_curation_user_prompt(testimonials: Sequence[Testimonial]) -> str:
    """
    Build the user prompt for one ranking call.

    Args:
        testimonials: Validated candidates, in caller order

    Returns:
        Prompt text listing every candidate and the expected JSON output
    """
    listing = "\n".join(_format_testimonial(t) for t in testimonials)

    return f"""Given the following testimonials:

<testimonials count="{len(testimonials)}">
{listing}
</testimonials>

<task>
Select the testimonials that are most impactful, recent, and representative of user feedback. For each selected testimonial, provide a reason for its selection.
</task>

<output_format>
Return a JSON array of objects, where each object contains the "id" of the selected testimonial and a "reason" explaining why it was chosen.
</output_format>
"""
