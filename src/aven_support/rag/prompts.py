import yaml

from aven_support.config import PROMPT_PATH


def load_prompts(path=PROMPT_PATH):
    """Loads prompts from a YAML file."""
    with open(path, "r") as f:
        return yaml.safe_load(f)


class PromptBuilder:
    """Rewrites the last chat message into a context-grounded prompt."""

    def __init__(self, prompts=None):
        self.prompts = prompts or load_prompts()
        self.template = self.prompts["answer_generation"]["user_prompt_template"]

    def render(self, context: str, query: str) -> str:
        return self.template.format(context=context, query_text=query)

    def build(self, messages: list[dict], context: str, query: str) -> list[dict]:
        """Return a new message list; only the final message's content changes."""
        if not messages:
            raise ValueError("messages must not be empty")
        last = messages[-1]
        return [*messages[:-1], {**last, "content": self.render(context, query)}]
