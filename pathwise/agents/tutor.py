from pathwise.agents.llm.base import LLMClient

CONTEXT_MESSAGES = 5

SYSTEM_TUTOR = """You are a helpful learning assistant focused on explaining concepts and answering questions. Your role is to:
1. Provide clear, concise explanations
2. Use examples when helpful
3. Break down complex topics
4. Answer specific questions
5. Suggest learning resources when relevant
"""

GREETING = (
    "Hi! I'm your learning assistant. I can help you with:\n\n"
    "• Explaining concepts\n"
    "• Solving problems\n"
    "• Answering doubts\n"
    "• Providing examples\n"
    "• Suggesting learning resources\n\n"
    "What would you like to learn about?"
)


def build_tutor_prompt(history: list[tuple[bool, str]], message: str) -> str:
    """history holds (is_user, text) pairs, oldest first."""
    context = "\n".join(
        f"{'User' if is_user else 'Assistant'}: {text}"
        for is_user, text in history[-CONTEXT_MESSAGES:]
    )
    return f"""
Here's the recent conversation context:

{context}

User: {message}

Provide a helpful, educational response that maintains context:
""".strip()


async def tutor_reply(llm: LLMClient, history: list[tuple[bool, str]], message: str) -> str:
    return await llm.generate_text(system=SYSTEM_TUTOR,
    user=build_tutor_prompt(history, message), temperature=0.7, max_tokens=300)
