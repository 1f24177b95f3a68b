"""Answer generation exceptions."""

from .base import DocQAError


class SynthesisError(DocQAError):
    """The generative model call failed for a question.

    Common causes:
    - Invalid API key or exhausted quota
    - Content blocked by safety settings
    - Request timeout
    """

    error_code = "DQ_SYN_001"
