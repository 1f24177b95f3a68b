"""Prompt templates for query rewriting and grounded answering."""

NOT_FOUND_ANSWER = "Not mentioned in the document."

QUERY_REWRITE_PROMPT = """Rewrite the question below so it can be understood on its own, \
without any surrounding conversation.

## Instructions:
- Replace pronouns and vague references ("it", "this policy", "they") with the \
specific subject they refer to, when that subject is stated in the question.
- Expand elliptical or fragmentary questions into a complete question.
- Keep every domain term, number, duration and amount exactly as written.
- Do NOT answer the question and do NOT add new facts.

Return ONLY the rewritten question. No explanations.

## Question:
{question}
"""

ANSWER_SYSTEM_PROMPT = f"""You are a certified policy document analyst.

Your job is to answer strictly based on the provided document context. Return answers \
in a professional, clause-like tone, as typically written in insurance, legal and HR \
documents.

## Guidelines
- If the answer is clearly present in the context, respond with a formal, complete \
sentence using the exact terms from the document (specific durations, limits, \
exclusions, definitions, amounts).
- If the document covers the topic indirectly or in conditions or tables, report the \
relevant clause clearly.
- Do NOT guess, assume, summarize loosely, or add information not found in the context.
- Do NOT generate examples, interpretations, or generic statements.
- If the answer is truly not found in the context, respond exactly with: \
"{NOT_FOUND_ANSWER}"
"""

ANSWER_PROMPT_TEMPLATE = """Context:
{context}

Question: {question}
"""


def build_answer_prompt(context: str, question: str) -> tuple[str, str]:
    """Return ``(prompt, system_prompt)`` for a grounded answer request."""
    return ANSWER_PROMPT_TEMPLATE.format(context=context, question=question), ANSWER_SYSTEM_PROMPT


def build_rewrite_prompt(question: str) -> str:
    return QUERY_REWRITE_PROMPT.format(question=question)
