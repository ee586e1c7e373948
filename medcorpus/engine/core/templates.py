"""Conditional blocks for prompt templates.

Prompt files mark optional text with ``{{#if name}} ... {{/if}}``. When the
variable has a value the block body is kept and ``{{name}}`` is substituted;
otherwise the whole block is removed.
"""

import re

PATIENT_QUESTION_VARIABLE = "patient_question"


def apply_conditional_block(template: str, variable: str, value: str | None) -> str:
    """Resolve every ``{{#if variable}}...{{/if}}`` block in ``template``.

    Args:
        template: Prompt text
        variable: Variable name used in the block and placeholder
        value: Substituted text; None or empty removes the blocks

    Returns:
        Template with blocks resolved. Text outside blocks is unchanged,
        except for ``{{variable}}`` placeholders when a value is given.
    """
    name = re.escape(variable)
    block = re.compile(r"\{\{#if " + name + r"\}\}(.*?)\{\{/if\}\}", re.DOTALL)

    if value:
        result = block.sub(lambda m: m.group(1), template)
        return result.replace("{{" + variable + "}}", value)
    return block.sub("", template)


def apply_patient_context(prompt: str, patient_context: str | None = None) -> str:
    """Fill the ``patient_question`` blocks of a prompt."""
    return apply_conditional_block(prompt, PATIENT_QUESTION_VARIABLE, patient_context)
