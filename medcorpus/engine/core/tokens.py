"""Token estimation for tool output sizing."""


def count_tokens(text: str) -> int:
    """Estimate token count for a string.

    Uses a simple heuristic of ~4 characters per token.
    This is a reasonable approximation for English text.
    """
    if not text:
        return 0
    return max(1, len(text) // 4)


def format_size(text: str) -> str:
    """Short size label, e.g. ``~3K chars, ~750 tokens``."""
    return f"~{round(len(text) / 1000)}K chars, ~{count_tokens(text)} tokens"
