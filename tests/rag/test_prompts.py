"""
Test suite for the grounded prompt template and PromptBuilder.
"""

import copy

import pytest

from aven_support.rag.prompts import PromptBuilder, load_prompts


@pytest.fixture
def builder() -> PromptBuilder:
    return PromptBuilder()


@pytest.fixture
def conversation() -> list[dict]:
    return [
        {"role": "system", "content": "You are Aven's voice assistant."},
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello! How can I help?"},
        {"role": "user", "content": "What is the credit limit?", "name": "caller"},
    ]


class TestPromptTemplate:

    def test_template_should_have_context_and_query_variables(self) -> None:
        # Act
        template = load_prompts()["answer_generation"]["user_prompt_template"]

        # Assert
        assert "{context}" in template
        assert "{query_text}" in template

    def test_rendered_prompt_should_carry_instructions(self, builder: PromptBuilder) -> None:
        # Act
        rendered = builder.render("ctx", "q").lower()

        # Assert
        assert "prefer the information in the context" in rendered
        assert "general knowledge" in rendered
        assert "concise and factual" in rendered


class TestPromptBuilder:

    def test_only_last_message_content_should_change(self, builder, conversation) -> None:
        # Act
        result = builder.build(conversation, "Limits go up to $250,000.", "What is the credit limit?")

        # Assert
        assert result[:-1] == conversation[:-1]
        assert result[-1]["role"] == "user"
        assert result[-1]["name"] == "caller"
        assert result[-1]["content"] != conversation[-1]["content"]

    def test_context_and_query_should_be_embedded_verbatim(self, builder, conversation) -> None:
        # Arrange
        context = "Limits go up to $250,000.\n\nRates {vary} by state."
        query = "What is the credit limit?"

        # Act
        content = builder.build(conversation, context, query)[-1]["content"]

        # Assert
        assert context in content
        assert query in content

    def test_build_should_not_mutate_input(self, builder, conversation) -> None:
        # Arrange
        original = copy.deepcopy(conversation)

        # Act
        builder.build(conversation, "ctx", "q")

        # Assert
        assert conversation == original

    def test_empty_context_should_still_render(self, builder) -> None:
        # Act
        result = builder.build([{"role": "user", "content": "q"}], "", "q")

        # Assert
        assert len(result) == 1
        assert "q" in result[0]["content"]

    def test_empty_messages_should_be_rejected(self, builder) -> None:
        with pytest.raises(ValueError):
            builder.build([], "ctx", "q")

    def test_custom_prompts_should_be_used(self) -> None:
        # Arrange
        prompts = {"answer_generation": {"user_prompt_template": "C={context} Q={query_text}"}}

        # Act
        result = PromptBuilder(prompts=prompts).build([{"role": "user", "content": "x"}], "ctx", "x")

        # Assert
        assert result[-1]["content"] == "C=ctx Q=x"
