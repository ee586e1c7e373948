"""Tests for prompt template conditional blocks."""

from medcorpus.engine.core import apply_conditional_block, apply_patient_context


class TestConditionalBlock:
    def test_removed_without_value(self):
        template = "Before {{#if q}}Question: {{q}}{{/if}} After"
        assert apply_conditional_block(template, "q", None) == "Before  After"

    def test_empty_value_removes(self):
        template = "Before {{#if q}}Question: {{q}}{{/if}} After"
        assert apply_conditional_block(template, "q", "") == "Before  After"

    def test_kept_and_substituted(self):
        template = "Before {{#if q}}Question: {{q}}{{/if}} After"
        assert apply_conditional_block(template, "q", "Why tired?") == "Before Question: Why tired? After"

    def test_multiline_block(self):
        template = "A\n{{#if q}}\nLine one\n{{q}}\n{{/if}}\nB"

        assert apply_conditional_block(template, "q", None) == "A\n\nB"
        assert apply_conditional_block(template, "q", "x") == "A\n\nLine one\nx\n\nB"

    def test_every_block_resolved(self):
        template = "{{#if q}}one{{/if}} mid {{#if q}}two {{q}}{{/if}}"

        assert apply_conditional_block(template, "q", None) == " mid "
        assert apply_conditional_block(template, "q", "v") == "one mid two v"

    def test_placeholder_outside_block_substituted(self):
        assert apply_conditional_block("Hi {{q}}", "q", "there") == "Hi there"

    def test_other_variables_untouched(self):
        template = "{{#if other}}keep{{/if}} {{#if q}}drop{{/if}}"
        assert apply_conditional_block(template, "q", None) == "{{#if other}}keep{{/if}} "

    def test_variable_name_is_literal(self):
        template = "{{#if a.b}}x{{/if}}{{#if aXb}}y{{/if}}"
        assert apply_conditional_block(template, "a.b", None) == "{{#if aXb}}y{{/if}}"


class TestPatientContext:
    def test_fills_patient_question(self):
        prompt = "Analyze.{{#if patient_question}} Focus on: {{patient_question}}{{/if}}"
        assert apply_patient_context(prompt, "fatigue") == "Analyze. Focus on: fatigue"

    def test_default_removes_block(self):
        prompt = "Analyze.{{#if patient_question}} Focus on: {{patient_question}}{{/if}}"
        assert apply_patient_context(prompt) == "Analyze."
