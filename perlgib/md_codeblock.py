"""Utility for generating Markdown code blocks."""

import re


def md_codeblock(lang: str, code: str) -> str:
    """Generate a Markdown code block, lengthening the fence if the code has one."""
    longest = max((len(m) for m in re.findall(r"`{3,}", code)), default=2)
    fence = "`" * (longest + 1)
    return f"{fence}{lang}\n{code.rstrip()}\n{fence}"
